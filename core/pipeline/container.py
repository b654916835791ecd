"""Explicit construction and wiring of the pipeline services."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Self, TypeVar

from core.backend import LocalBackend, TranslationBackend
from core.backend.interface import TranslateExceptionError
from core.cache.bounded_cache import BoundedCache
from core.cache.inflight_manager import InFlightManager
from core.correction.corrector import PhoneticCorrector
from core.input.normalizer import InputNormalizer
from core.pipeline.pipeline import MessagePipeline
from core.preview.debouncer import PreviewDebouncer
from core.registry.registry import LanguageRegistry
from core.trans.engine import SemanticTranslationEngine
from handlers.transliterator import Transliterator
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config

__all__: list[str] = ["ServiceContainer"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

T = TypeVar("T")


class ServiceContainer:
    """Owns every service of the pipeline for the lifetime of the application.

    Services are created in ``initialize()`` in dependency order and released in ``shutdown()``.
    Accessing a service before initialization raises RuntimeError.

    Attributes:
        config (Config): Configuration the services are built from.
    """

    def __init__(self, config: Config) -> None:
        self.config: Config = config
        self._registry: LanguageRegistry | None = None
        self._corrector: PhoneticCorrector | None = None
        self._normalizer: InputNormalizer | None = None
        self._transliterator: Transliterator | None = None
        self._backend: TranslationBackend | None = None
        self._inflight: InFlightManager[str] | None = None
        self._engine: SemanticTranslationEngine | None = None
        self._pipeline: MessagePipeline | None = None
        self._debouncer: PreviewDebouncer | None = None

    async def __aenter__(self) -> Self:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.shutdown()

    @property
    def is_initialized(self) -> bool:
        return self._pipeline is not None

    @staticmethod
    def _require(service: T | None, name: str) -> T:
        if service is None:
            msg: str = f"Service '{name}' is not initialized; call initialize() first"
            raise RuntimeError(msg)
        return service

    @property
    def registry(self) -> LanguageRegistry:
        return self._require(self._registry, "registry")

    @property
    def corrector(self) -> PhoneticCorrector:
        return self._require(self._corrector, "corrector")

    @property
    def normalizer(self) -> InputNormalizer:
        return self._require(self._normalizer, "normalizer")

    @property
    def transliterator(self) -> Transliterator:
        return self._require(self._transliterator, "transliterator")

    @property
    def backend(self) -> TranslationBackend:
        return self._require(self._backend, "backend")

    @property
    def engine(self) -> SemanticTranslationEngine:
        return self._require(self._engine, "engine")

    @property
    def pipeline(self) -> MessagePipeline:
        return self._require(self._pipeline, "pipeline")

    @property
    def debouncer(self) -> PreviewDebouncer:
        return self._require(self._debouncer, "debouncer")

    async def initialize(self) -> None:
        """Build all services. Calling it again on an initialized container does nothing."""
        if self.is_initialized:
            logger.debug("ServiceContainer already initialized")
            return

        config: Config = self.config
        data_file: Path | None = Path(config.REGISTRY.DATA_FILE) if config.REGISTRY.DATA_FILE else None
        self._registry = LanguageRegistry.from_json(data_file, aliases=config.REGISTRY.ALIASES)
        self._corrector = PhoneticCorrector(
            max_distance=config.CORRECTION.MAX_DISTANCE,
            max_variant_distance=config.CORRECTION.MAX_VARIANT_DISTANCE,
            cache_size=config.CACHE.MAX_CORRECTIONS,
            cache_policy=config.CACHE.POLICY,
        )
        self._normalizer = InputNormalizer(
            self._registry,
            self._corrector,
            voice_burst_chars=config.INPUT.VOICE_BURST_CHARS,
            english_ratio=config.INPUT.ENGLISH_RATIO,
        )
        self._transliterator = Transliterator(self._registry)
        self._backend = self._create_backend(config.TRANSLATION.BACKEND)

        self._inflight = InFlightManager(timeout=config.CACHE.INFLIGHT_TIMEOUT)
        await self._inflight.component_load()
        self._engine = SemanticTranslationEngine(
            self._registry,
            self._backend,
            self._transliterator,
            BoundedCache(config.CACHE.MAX_TRANSLATIONS, config.CACHE.POLICY, name="TranslationCache"),
            text_prefix=config.CACHE.TEXT_PREFIX,
            inflight=self._inflight,
            pivot_language=config.TRANSLATION.PIVOT_LANGUAGE.strip().lower(),
        )
        self._pipeline = MessagePipeline(
            self._normalizer,
            self._corrector,
            self._engine,
            self._registry,
            correction_enabled=config.CORRECTION.ENABLED,
        )
        self._debouncer = PreviewDebouncer(config.PREVIEW.DEBOUNCE_SEC)
        logger.info("ServiceContainer initialized (backend: %s)", self._backend.fetch_backend_name())

    def _create_backend(self, name: str) -> TranslationBackend:
        """Instantiate the configured backend, falling back to the offline one when it cannot start."""
        backend_cls: type[TranslationBackend] | None = TranslationBackend.registered.get(name)
        if backend_cls is None:
            logger.warning("Unknown translation backend '%s'; using 'local'", name)
            backend_cls = LocalBackend

        backend: TranslationBackend = backend_cls()
        try:
            backend.initialize(self.config, self.registry)
        except (TranslateExceptionError, RuntimeError) as err:
            if backend_cls is LocalBackend:
                raise
            logger.error("Failed to initialize backend '%s': %s; using 'local'", name, err)
            backend = LocalBackend()
            backend.initialize(self.config, self.registry)
        return backend

    async def shutdown(self) -> None:
        """Cancel pending previews, drop in-flight requests and close the backend."""
        if self._debouncer is not None:
            await self._debouncer.shutdown()
        if self._inflight is not None:
            await self._inflight.component_teardown()
        if self._backend is not None:
            await self._backend.close()

        self._pipeline = None
        self._engine = None
        self._debouncer = None
        self._inflight = None
        self._backend = None
        logger.info("ServiceContainer shut down")
