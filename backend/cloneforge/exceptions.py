"""Custom exceptions for cloneforge."""


class CloneForgeError(Exception):
    """Base exception for cloneforge."""


class ConfigError(CloneForgeError):
    """Raised when required credentials or settings are missing."""


class AnalysisError(CloneForgeError):
    """Raised when a page cannot be loaded or its content extracted."""


class GenerationError(CloneForgeError):
    """Raised when the generative model call fails or times out."""


class UnsupportedFrameworkError(CloneForgeError, ValueError):
    """Raised for a framework tag outside the supported set."""

    def __init__(self, framework):
        self.framework = framework
        super().__init__(f"Unsupported framework: {framework}")
