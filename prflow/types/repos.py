"""Repository-related data models."""

from dataclasses import dataclass


@dataclass
class Owner:
    """Repository owner."""

    login: str


@dataclass
class Repository:
    """Repository information as listed for the authenticated user."""

    name: str
    owner: Owner
    html_url: str
    private: bool

    @property
    def owner_login(self) -> str:
        return self.owner.login

    @property
    def full_name(self) -> str:
        return f"{self.owner.login}/{self.name}"
