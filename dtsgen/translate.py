"""Single-unit translation: annotated Lua text in, declaration text out."""

from __future__ import annotations

from .annotations import parse_annotations
from .emitter import DeclarationEmitter
from .logging import get_logger
from .models import ModuleConfig, TranslationOutcome
from .postproc import apply_post_processing

logger = get_logger("translate")


def translate(
    source_text: str,
    config: ModuleConfig,
    *,
    emitter: DeclarationEmitter | None = None,
) -> TranslationOutcome:
    """Translate one annotated source unit according to its module config.

    A unit without any `@class` is skipped rather than failed. Emission
    failures are reported as an error outcome so a batch can continue.
    """
    result = parse_annotations(source_text)
    if not result.classes:
        return TranslationOutcome.skipped(f"No classes found in {config.source_file}")

    emitter = emitter or DeclarationEmitter()
    try:
        declaration = emitter.render(result, config)
    except Exception as exc:
        logger.debug("Emission failed for %s", config.name, exc_info=True)
        return TranslationOutcome.error(f"{type(exc).__name__}: {exc}")

    return TranslationOutcome.generated(apply_post_processing(config.name, declaration))


__all__ = ["translate"]
