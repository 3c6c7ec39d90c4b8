class CosenseApiException(Exception):
    def __init__(self, url: str, status: int, reason: str | None = None):
        self.url = url
        self.status = status
        self.reason = reason
        super().__init__(f"Cosense API error {status} ({reason or 'unknown'}) for {url}")
