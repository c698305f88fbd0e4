from __future__ import annotations


class PaletteError(Exception):
    """Base class for errors reported by the palette engine."""


class InvalidArgument(PaletteError, ValueError):
    """Bad input to an engine operation (empty palette, nothing sampled, ...)."""


class ExtractionFailed(PaletteError, RuntimeError):
    """Quantization produced no colours for the given image."""


class PreconditionFailed(PaletteError, RuntimeError):
    """Session state does not allow the requested operation."""
