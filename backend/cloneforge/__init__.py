"""CloneForge backend: website analysis and multi-framework code generation."""

__version__ = "0.1.0"
