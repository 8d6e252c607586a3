"""Domain level failures raised by fact imports."""

from __future__ import annotations


class FactImportError(RuntimeError):
    """Raised when at least one fact of a batch could not be imported."""

    def __init__(self, host_name: str) -> None:
        super().__init__(f"Import of facts failed for host {host_name}")
        self.host_name = host_name


class HostNotFoundError(LookupError):
    """Raised when facts arrive for an unknown host and host creation is disabled."""

    def __init__(self, host_name: str) -> None:
        super().__init__(f"Host {host_name} does not exist")
        self.host_name = host_name
