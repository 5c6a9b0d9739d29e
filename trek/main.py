"""
Main orchestrator for trek.

Coordinates the pipeline: MetadataCollector → MetadataResolver →
ExtractorRegistry, then either a site-specific extractor or the generic
path (ClutterRemover → standardize_content). The collected snapshot and
resolved metadata are computed once per parse() call and shared by the
generic path's low-content retry.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .clutter import ClutterRemover
from .collector import MetadataCollector
from .constants import DEFAULT_IMAGE_DIMENSION, MIN_IMAGE_DIMENSION, MIN_WORD_COUNT
from .dom import parse_fragment
from .exceptions import ExtractorError, TrekError
from .extractors import BaseExtractor, ExtractorRegistry
from .logger import get_module_logger, setup_logger
from .metadata import MetadataResolver
from .schemas import CollectedData, Metadata, Response, TrekOptions
from .scoring import ContentScorer
from .standardize import standardize_content
from .text import html_to_markdown
from .utils import count_words, current_time_ms, decode_document, extract_body_content

logger = get_module_logger("main")


def _parse_dimension(value: Any) -> int:
    """Declared image dimension; absent or non-numeric values use the default."""
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return DEFAULT_IMAGE_DIMENSION


def find_first_image(html: str) -> Optional[str]:
    """
    First image in the content worth using as the page image.

    Data URLs and images declared smaller than MIN_IMAGE_DIMENSION in
    either direction (tracking pixels, icons) are skipped.
    """
    soup = parse_fragment(html)
    for img in soup.find_all('img'):
        src = img.get('src') or ''
        if not src or src.startswith('data:'):
            continue
        width = _parse_dimension(img.get('width'))
        height = _parse_dimension(img.get('height'))
        if width >= MIN_IMAGE_DIMENSION and height >= MIN_IMAGE_DIMENSION:
            return src
    return None


class Trek:
    """
    Main content extractor.

    Usage:
        trek = Trek(TrekOptions(url="https://example.com/post"))
        response = trek.parse(html)
        print(response.metadata.title, response.metadata.word_count)
    """

    def __init__(
        self,
        options: Optional[TrekOptions] = None,
        registry: Optional[ExtractorRegistry] = None,
        log_level: Optional[int] = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.options = options or TrekOptions()
        self.collector = MetadataCollector()
        self.resolver = MetadataResolver()
        self.registry = registry if registry is not None else ExtractorRegistry.default()

        logger.debug(f"Trek initialized with options: {self.options.model_dump(by_alias=True)}")

    @classmethod
    def from_dict(cls, options: Mapping[str, Any], **kwargs) -> "Trek":
        """Build an instance from wire-format (camelCase) options."""
        return cls(TrekOptions.model_validate(dict(options)), **kwargs)

    def parse(self, html: str) -> Response:
        """
        Extract the main content and metadata of an HTML document.

        Args:
            html: Raw HTML document

        Returns:
            Response with cleaned content, meta tags and resolved metadata

        Raises:
            ParseError: if the tokenizer rejects the document
            ExtractorError: if the selected site-specific extractor fails
        """
        start_time = current_time_ms()
        logger.info("Starting parse")

        # Stage 1: one collection pass over the untouched document
        collected = self.collector.collect(html)

        # Stage 2: metadata, resolved once and reused by the retry below
        metadata = self.resolver.resolve(collected, self.options.url)

        # Stage 3: site-specific extractor, if one claims the page
        extractor = self.registry.find(self.options.url or "", collected.schema_org_data)
        if extractor is not None:
            logger.info(f"Using site-specific extractor: {extractor.name()}")
            response = self._parse_with_extractor(extractor, html, collected, metadata, start_time)
            return self._apply_output_format(response)

        # Stage 4: generic path
        response = self._parse_internal(html, collected, metadata, self.options, start_time)

        # Stage 5: too little content survived removal, try again without it
        if response.metadata.word_count < MIN_WORD_COUNT and self.options.removal_enabled:
            logger.info(
                f"Initial parse returned {response.metadata.word_count} words, "
                f"trying again without clutter removal"
            )
            retry_options = self.options.model_copy(update={
                "remove_exact_selectors": False,
                "remove_partial_selectors": False,
            })
            retry = self._parse_internal(html, collected, metadata, retry_options, start_time)
            if retry.metadata.word_count > response.metadata.word_count:
                logger.debug("Retry produced more content")
                response = retry

        logger.info(f"Complete: {response.metadata.word_count} words")
        return self._apply_output_format(response)

    def _parse_with_extractor(
        self,
        extractor: BaseExtractor,
        html: str,
        collected: CollectedData,
        metadata: Metadata,
        start_time: int
    ) -> Response:
        try:
            extracted = extractor.extract(html)
        except TrekError:
            raise
        except Exception as e:
            logger.error(f"Extractor {extractor.name()} failed: {e}")
            raise ExtractorError(
                f"Extractor failed: {e}",
                extractor=extractor.name(),
                details={"url": self.options.url}
            ) from e

        # Present fields win over the resolver's values
        overrides = {
            field: value
            for field, value in (
                ("title", extracted.title),
                ("author", extracted.author),
                ("published", extracted.published),
            )
            if value is not None
        }

        content = extracted.content_html or ""
        overrides["word_count"] = count_words(content)
        overrides["parse_time"] = current_time_ms() - start_time

        return Response(
            content=content,
            extractor_type=extractor.name(),
            meta_tags=list(collected.meta_tags),
            metadata=metadata.model_copy(update=overrides),
        )

    def _parse_internal(
        self,
        html: str,
        collected: CollectedData,
        metadata: Metadata,
        options: TrekOptions,
        start_time: int
    ) -> Response:
        """One generic-path attempt with the given removal options."""
        body = extract_body_content(html)

        remover = ClutterRemover(
            remove_exact=options.remove_exact_selectors,
            remove_partial=options.remove_partial_selectors,
        )
        cleaned = remover.remove(body)
        if options.debug:
            logger.debug(f"After clutter removal, content length: {len(cleaned)}")

        content = standardize_content(cleaned, metadata.title, options.debug)

        updates = {
            "word_count": count_words(content),
            "parse_time": current_time_ms() - start_time,
        }
        if not metadata.image:
            image = find_first_image(content)
            if image:
                logger.debug(f"Found first image in content: {image}")
                updates["image"] = image

        if options.debug:
            logger.debug(f"Content score: {ContentScorer.score_text(content)}")

        return Response(
            content=content,
            meta_tags=list(collected.meta_tags),
            metadata=metadata.model_copy(update=updates),
        )

    def _apply_output_format(self, response: Response) -> Response:
        """Add or substitute the Markdown rendering the options ask for."""
        if self.options.separate_markdown:
            return response.model_copy(update={"content_markdown": html_to_markdown(response.content)})
        if self.options.markdown:
            return response.model_copy(update={"content": html_to_markdown(response.content)})
        return response

    def parse_file(self, file_path: Union[str, Path]) -> Response:
        """Parse an HTML file, decoding it with the charset it declares."""
        file_path = Path(file_path)

        # Sniff <meta charset> from the bytes before decoding
        raw_bytes = file_path.read_bytes()
        return self.parse(decode_document(raw_bytes))


def parse_html(html: str, **options) -> Response:
    """Convenience function to parse HTML."""
    return Trek(TrekOptions(**options)).parse(html)


def parse_html_file(file_path: Union[str, Path], **options) -> Response:
    """Convenience function to parse an HTML file."""
    return Trek(TrekOptions(**options)).parse_file(file_path)
