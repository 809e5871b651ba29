from __future__ import annotations


class StoreError(Exception):
    pass


class StoreTransportError(StoreError):
    pass


class StoreResponseError(StoreError):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedPayloadError(StoreError):
    pass


class FeatureDisabledError(Exception):
    pass
