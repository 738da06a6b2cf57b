"""Batch generation over the module registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import GeneratorConfig
from .emitter import DeclarationEmitter
from .logging import get_logger
from .models import ModuleConfig, TranslationOutcome
from .translate import translate

OUTPUT_SUFFIX = ".d.ts"


@dataclass
class BatchSummary:
    """Per-run counters plus the files written."""

    generated: int = 0
    skipped: int = 0
    errors: int = 0
    outputs: List[Path] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 0

    def describe(self) -> str:
        return f"{self.generated} generated, {self.skipped} skipped, {self.errors} errors"


class Orchestrator:
    """Translates every registered module (or one) and writes its declaration file."""

    def __init__(
        self,
        config: GeneratorConfig,
        emitter: DeclarationEmitter | None = None,
    ) -> None:
        self.config = config
        self.emitter = emitter or DeclarationEmitter()
        self.logger = get_logger("orchestrator")

    def output_path(self, module: ModuleConfig) -> Path:
        _, output_dir = self.config.require_paths()
        return output_dir / f"{module.name}{OUTPUT_SUFFIX}"

    def run(self, module_name: Optional[str] = None) -> BatchSummary:
        """Process modules in registry order; one unit's failure never stops the batch."""
        api_dir, _ = self.config.require_paths()
        modules = self.config.registry.select(module_name)
        summary = BatchSummary()

        self.logger.info("Generating TypeScript declarations for %d module(s)", len(modules))
        for module in modules:
            self.logger.info("Processing: %s (%s)", module.name, module.describe_flags())
            outcome = self._process(module, api_dir)
            if outcome.status == TranslationOutcome.GENERATED:
                summary.generated += 1
                summary.outputs.append(self.output_path(module))
            elif outcome.status == TranslationOutcome.SKIPPED:
                self.logger.warning("  %s", outcome.reason)
                summary.skipped += 1
            else:
                self.logger.error("  %s", outcome.reason)
                summary.errors += 1

        self.logger.info("Done! %s", summary.describe())
        return summary

    def _process(self, module: ModuleConfig, api_dir: Path) -> TranslationOutcome:
        input_path = api_dir / module.source_file
        if not input_path.exists():
            return TranslationOutcome.error(f"API file not found: {input_path}")

        try:
            source_text = input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return TranslationOutcome.error(f"Failed to read {input_path}: {exc}")

        outcome = translate(source_text, module, emitter=self.emitter)
        if not outcome.ok or outcome.declaration is None:
            return outcome

        output_path = self.output_path(module)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(outcome.declaration, encoding="utf-8")
        except OSError as exc:
            return TranslationOutcome.error(f"Failed to write {output_path}: {exc}")
        self.logger.info("  Generated: %s", output_path)
        return outcome


__all__ = ["BatchSummary", "OUTPUT_SUFFIX", "Orchestrator"]
