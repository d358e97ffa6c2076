from dataclasses import dataclass


@dataclass
class Session:
    """Token pair for the pollution provider."""

    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def authenticated(self) -> bool:
        return self.access_token is not None

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None
