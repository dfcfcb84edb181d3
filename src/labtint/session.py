"""
RecolorSession: keeps a decoded source and re-renders on parameter changes.

Editors call :meth:`RecolorSession.update` on every control change. The
source analysis (Lab conversion and dominant color) is computed once per
source image; each distinct parameter set re-runs every stage, and the most
recent result is cached so repeated calls with equal parameters are free.

A session is not thread-safe; use one per caller. :func:`labtint.process`
is the stateless alternative.

Example:
    >>> session = RecolorSession(codec=PillowCodec())
    >>> session.load_source(open("brush.png", "rb").read())
    >>> png = session.render_bytes(RecolorParams(target_color="#33AA77"))
    >>> png = session.render_bytes(RecolorParams(target_color="#33AA77", depth=60))
"""

from __future__ import annotations

import logging

from labtint.codec import PillowCodec
from labtint.config.values import RecolorParams
from labtint.pipeline import SourceAnalysis, analyze_source, render
from labtint.protocols import ImageCodec
from labtint.raster import RasterBuffer

logger = logging.getLogger(__name__)


class RecolorSession:
    """Source-holding recolor front end with result caching."""

    __slots__ = (
        "codec",
        "_source",
        "_analysis",
        "_last_params",
        "_last_result",
        "_render_count",
    )

    def __init__(self, source: RasterBuffer | None = None, codec: ImageCodec | None = None):
        """
        Initialize the session.

        :param source: Optional source raster
        :param codec: Codec used by :meth:`load_source` and :meth:`render_bytes`
            (defaults to a PNG PillowCodec)
        """
        self.codec: ImageCodec = codec if codec is not None else PillowCodec()
        self._source: RasterBuffer | None = None
        self._analysis: SourceAnalysis | None = None
        self._last_params: RecolorParams | None = None
        self._last_result: RasterBuffer | None = None
        self._render_count = 0
        if source is not None:
            self.set_source(source)

    # ========================================================================
    # Source management
    # ========================================================================

    def set_source(self, image: RasterBuffer) -> None:
        """Replace the source image and drop all derived state."""
        self._source = image
        self._analysis = None
        self.invalidate()
        logger.info("[Session] Source set (%dx%d)", image.width, image.height)

    def load_source(self, data: bytes) -> RasterBuffer:
        """Decode ``data`` with the session codec and use it as the source.

        :param data: Encoded image bytes
        :returns: The decoded source raster
        :raises ValueError: If the codec cannot decode ``data``
        """
        image = self.codec.decode(data)
        self.set_source(image)
        return image

    @property
    def source(self) -> RasterBuffer | None:
        return self._source

    @property
    def has_source(self) -> bool:
        return self._source is not None

    @property
    def analysis(self) -> SourceAnalysis:
        """Source analysis, computed on first access.

        :raises ValueError: If no source has been set
        """
        if self._analysis is None:
            self._analysis = analyze_source(self._require_source())
            stats = self._analysis.stats
            logger.debug(
                "[Session] Analyzed source: L=%.2f C=%.2f hue=%.3f (n=%d)",
                stats.lightness,
                stats.chroma,
                stats.hue,
                stats.n_samples,
            )
        return self._analysis

    @property
    def render_count(self) -> int:
        """Number of full renders performed (cache hits excluded)."""
        return self._render_count

    # ========================================================================
    # Rendering
    # ========================================================================

    def update(self, params: RecolorParams | None = None) -> RasterBuffer:
        """Render the source with ``params``, reusing the last result if unchanged.

        :param params: Recolor parameters (defaults to ``RecolorParams()``)
        :returns: Recolored raster; the cached instance on a repeat call
        :raises ValueError: If no source has been set
        """
        if params is None:
            params = RecolorParams()

        if self._last_result is not None and params == self._last_params:
            logger.debug("[Session] Parameters unchanged, reusing last result")
            return self._last_result

        result = render(self.analysis, params)
        self._last_params = params
        self._last_result = result
        self._render_count += 1
        return result

    __call__ = update

    def render_bytes(self, params: RecolorParams | None = None) -> bytes:
        """Render and encode with the session codec."""
        return self.codec.encode(self.update(params))

    def invalidate(self) -> None:
        """Drop the cached result; the next :meth:`update` re-renders."""
        self._last_params = None
        self._last_result = None

    def _require_source(self) -> RasterBuffer:
        if self._source is None:
            raise ValueError("No source image set. Call set_source() or load_source() first.")
        return self._source
