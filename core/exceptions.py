class WebfitError(Exception):
    def __init__(self, message: str, code: int = 500, details: str = ""):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        return f"Error {self.code}: {self.message} - {self.details}"


class StoreError(WebfitError):
    def __init__(self, operation: str, key: str, details: str = "") -> None:
        super().__init__(f"Store {operation} failed for key {key}", code=503, details=details)
        self.operation = operation
        self.key = key

