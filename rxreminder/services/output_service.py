"""Output service for saving schedule results"""
import json
from pathlib import Path
from typing import List, Optional
from datetime import datetime

from rxreminder.core.config import Config
from rxreminder.types.prescription import ProcessingResult


class OutputService:
    """Service for saving scheduling results"""

    @staticmethod
    def _get_safe_name(source_file: Optional[str]) -> str:
        """Get safe directory name from a prescription filename"""
        unknown_fallback = Config.get("defaults", "unknown_fallback", default="unknown")
        if not source_file:
            return unknown_fallback

        # Remove extension and sanitize
        name = Path(source_file).stem
        truncate_limit = Config.get("limits", "string_truncation_safe_name", default=100)
        safe_name = "".join(c for c in name if c.isalnum() or c in "._-")[:truncate_limit]
        return safe_name or unknown_fallback

    @staticmethod
    def save_result(
        result: ProcessingResult,
        output_dir: Path = None,
        source_name: Optional[str] = None
    ) -> Path:
        """
        Save a single scheduling result to JSON file in its own subdirectory

        Args:
            result: ProcessingResult to save
            output_dir: Output directory (defaults to Config.OUTPUT_DIR)
            source_name: Optional file name (taken from the result if not provided)

        Returns:
            Path to saved file
        """
        output_dir = Path(output_dir or Config.OUTPUT_DIR)

        if not source_name:
            source_name = result.source_file

        result_dir = output_dir / OutputService._get_safe_name(source_name)
        result_dir.mkdir(parents=True, exist_ok=True)

        results_filename = Config.get("files", "results_filename", default="results.json")
        output_path = result_dir / results_filename

        if result.success and result.schedule:
            output_data = {
                "prescription_id": result.schedule.prescription_id,
                "prescription_name": result.schedule.prescription_name,
                "schedules": [entry.model_dump() for entry in result.schedule.schedules],
                "unresolved": result.schedule.unresolved,
                "refill_date": result.schedule.refill_date,
            }
        else:
            output_data = {
                "success": False,
                "error": result.error,
                "processing_time": result.processing_time,
                "timestamp": datetime.now().isoformat()
            }

        json_indent = Config.get("defaults", "json_indent", default=2)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(output_data, f, indent=json_indent, ensure_ascii=False)

        return output_path

    @staticmethod
    def save_batch_summary(
        results: List[ProcessingResult],
        output_dir: Path = None,
        summary_filename: str = None
    ) -> Path:
        """
        Save batch scheduling summary

        Args:
            results: List of processing results
            output_dir: Output directory
            summary_filename: Name of summary file

        Returns:
            Path to summary file
        """
        output_dir = Path(output_dir or Config.OUTPUT_DIR)
        output_dir.mkdir(parents=True, exist_ok=True)

        if not summary_filename:
            summary_filename = Config.get("files", "summary_filename", default="summary.json")
        summary_path = output_dir / summary_filename

        successful = [r for r in results if r.success]

        summary = {
            "timestamp": datetime.now().isoformat(),
            "total": len(results),
            "successful": len(successful),
            "failed": len(results) - len(successful),
            "with_refill_date": sum(1 for r in successful if r.schedule and r.schedule.refill_date),
            "results": [
                {
                    "success": r.success,
                    "source_file": r.source_file,
                    "error": r.error,
                    "processing_time": r.processing_time,
                    "medications_scheduled": len(r.schedule.schedules) if r.schedule else 0,
                    "refill_date": r.schedule.refill_date if r.schedule else None,
                }
                for r in results
            ]
        }

        json_indent = Config.get("defaults", "json_indent", default=2)
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=json_indent, ensure_ascii=False)

        return summary_path
