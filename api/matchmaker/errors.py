class MatchmakerError(Exception):
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidInput(MatchmakerError):
    status_code = 400


class NotFound(MatchmakerError):
    status_code = 404


class Internal(MatchmakerError):
    status_code = 500
