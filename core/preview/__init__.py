"""Debounced live previews."""

from core.preview.debouncer import CancellationToken, PreviewDebouncer

__all__: list[str] = ["CancellationToken", "PreviewDebouncer"]
