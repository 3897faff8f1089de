"""Nielsen DCR destination exceptions.

None of these are raised out of ``track``/``screen``; the destination is a
best-effort mapping layer. They surface from the settings loader and CLI.
"""


class DestinationError(Exception):
    """Base exception for destination errors."""


class SettingsError(DestinationError):
    """Settings payload could not be loaded or validated."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid settings from {source}: {reason}")


class IntegrationNotConfiguredError(SettingsError):
    """Settings payload has no block for this integration."""

    def __init__(self, source: str, integration: str) -> None:
        self.integration = integration
        super().__init__(source, f"no settings for integration '{integration}'")
