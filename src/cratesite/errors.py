"""Exception types raised by cratesite."""


class CratesiteError(Exception):
    """Base class for cratesite errors."""


class PackageNotFoundError(CratesiteError):
    """The registry has no crate with the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Crate '{name}' does not exist")
        self.name = name


class RegistryConnectionError(CratesiteError):
    """The registry could not be reached or returned an unusable response."""


class NoVersionsError(CratesiteError):
    """A package summary carries no version records at all."""

    def __init__(self, name: str):
        super().__init__(f"Crate '{name}' has no versions")
        self.name = name
