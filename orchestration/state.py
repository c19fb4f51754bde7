from enum import Enum


class TurnState(str, Enum):
    """
    Where a ChatSession is within a turn.
    
    idle -> composing -> awaiting_completion -> parsing
         -> (summarizing) -> appending -> idle
    """
    IDLE = "idle"
    COMPOSING = "composing"
    AWAITING_COMPLETION = "awaiting_completion"
    PARSING = "parsing"
    SUMMARIZING = "summarizing"
    APPENDING = "appending"
