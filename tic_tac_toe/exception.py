class GameError(Exception):
    pass


class LogicError(GameError):
    pass


class InvalidCoordinateError(GameError, IndexError):
    pass


class InvalidMoveError(GameError):
    pass


class CellOccupiedError(InvalidMoveError):
    pass


class InvalidStateError(InvalidMoveError):
    pass
