# ABOUTME: Line filters that pull scoring and action rules out of free-form mission card text.
# ABOUTME: Used by battle phases to remind players which mission rules apply right now.

PRIMARY_SCORING_LINE_LIMIT = 10
SECONDARY_SCORING_LINE_LIMIT = 6
ACTION_LINE_LIMIT = 8
END_OF_TURN_LINE_LIMIT = 5
END_OF_ROUND_LINE_LIMIT = 5

_PRIMARY_SCORING_WORDS = ("score", "control", "objective")
_END_OF_TURN_TRIGGERS = ("end of your turn", "end of the turn", "end of either player's turn")
_ACTION_STOP_WORDS = ("second battle round", "any battle round")


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def primary_scoring_lines(text: str) -> list[str]:
    """Lines of a primary mission that talk about VP, scoring or objectives"""
    matches = [
        line for line in _lines(text)
        if "VP" in line or any(word in line.lower() for word in _PRIMARY_SCORING_WORDS)
    ]
    return matches[:PRIMARY_SCORING_LINE_LIMIT]


def secondary_scoring_lines(text: str) -> list[str]:
    matches = [line for line in _lines(text) if "VP" in line or "score" in line.lower()]
    return matches[:SECONDARY_SCORING_LINE_LIMIT]


def mission_action_lines(text: str) -> list[str]:
    """
    The action block of a mission: from the first line mentioning an action up
    to (not including) the line that restricts which battle rounds it applies to.
    """
    lines = _lines(text)
    start = next((i for i, line in enumerate(lines) if "action" in line.lower()), None)
    if start is None:
        return []

    block = []
    for line in lines[start:]:
        if any(word in line.lower() for word in _ACTION_STOP_WORDS):
            break
        block.append(line)
    return block[:ACTION_LINE_LIMIT]


def has_end_of_turn_scoring(text: str) -> bool:
    lowered = text.lower()
    return any(trigger in lowered for trigger in _END_OF_TURN_TRIGGERS)


def end_of_turn_scoring_lines(text: str) -> list[str]:
    matches = [
        line for line in _lines(text)
        if "end of" in line.lower() and "turn" in line.lower()
    ]
    return matches[:END_OF_TURN_LINE_LIMIT]


def has_end_of_round_scoring(text: str) -> bool:
    return "end of the battle round" in text.lower()


def end_of_round_scoring_lines(text: str) -> list[str]:
    matches = [line for line in _lines(text) if "battle round" in line.lower()]
    return matches[:END_OF_ROUND_LINE_LIMIT]
