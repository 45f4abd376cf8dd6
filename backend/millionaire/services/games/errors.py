"""Recoverable game conditions raised by the engine.

Routes catch :class:`GameError` and turn it into a JSON error response. Losing
a game (wrong answer, timeout) is a normal outcome and is never raised.
"""


class GameError(Exception):
    message = 'Game error'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class GameAlreadyInProgress(GameError):
    message = 'You have not finished your previous game'

    def __init__(self, game, message=None):
        super().__init__(message)
        self.game = game


class InsufficientQuestionBank(GameError):
    def __init__(self, level):
        super().__init__(f'No question available for level {level}')
        self.level = level


class GameAlreadyFinished(GameError):
    message = 'This game is already finished'


class HintAlreadyUsed(GameError):
    def __init__(self, help_type):
        super().__init__(f'Hint {help_type} has already been used in this game')
        self.help_type = help_type


class UnknownHintType(GameError):
    def __init__(self, help_type):
        super().__init__(f'Unknown hint type: {help_type}')
        self.help_type = help_type
