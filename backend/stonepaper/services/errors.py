class StonePaperError(Exception):
    """Base class for failures in the collaborator services."""


class RoomDirectoryError(StonePaperError):
    pass


class HistoryWriteError(StonePaperError):
    pass


class NotificationError(StonePaperError):
    pass
