"""Frequency notation to daily reminder times"""
from typing import List, NamedTuple, Tuple


class FrequencyRule(NamedTuple):
    """Substring triggers and the HH:MM times they map to"""
    triggers: Tuple[str, ...]
    times: Tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(trigger in text for trigger in self.triggers)


# Evaluated in order, first match wins
FREQUENCY_RULES: Tuple[FrequencyRule, ...] = (
    FrequencyRule(("1-0-0", "once a day", "morning"), ("09:00",)),
    FrequencyRule(("0-0-1", "night"), ("21:00",)),
    FrequencyRule(("1-0-1", "twice a day", "bd", "bid"), ("09:00", "21:00")),
    FrequencyRule(("1-1-1", "thrice a day", "tds", "tid"), ("09:00", "13:00", "21:00")),
    FrequencyRule(("four times a day", "qid"), ("08:00", "12:00", "16:00", "21:00")),
)


def parse_frequency(frequency: str) -> List[str]:
    """
    Map a free-text frequency to the daily times a reminder should fire at

    Args:
        frequency: Frequency as written on the prescription (e.g., '1-0-1', 'BD', 'Twice a day')

    Returns:
        Ascending list of HH:MM strings, empty when no pattern is recognised
    """
    if not isinstance(frequency, str):
        return []

    text = frequency.lower()
    for rule in FREQUENCY_RULES:
        if rule.matches(text):
            return list(rule.times)
    return []
