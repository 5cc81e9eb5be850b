from typing import Optional

# Custom Exceptions
class InvalidSeriesError(ValueError):
    def __init__(self, message: str = "Invalid historical price series", detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)
