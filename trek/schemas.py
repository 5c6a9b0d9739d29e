"""
Pydantic schemas defining the contracts between pipeline stages.

CollectedData: Contract from the Metadata Collector to the Resolver and Registry
Metadata:      Resolved page metadata, finished by the Pipeline Controller
Response:      Standard output of Trek.parse()

Data flow through the pipeline:
  raw HTML → MetadataCollector → CollectedData
  CollectedData + url → MetadataResolver → Metadata
  raw HTML → ClutterRemover → standardize_content → content
  content + Metadata → Response
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Wire format is camelCase; Python callers may still use field names.
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Collected (raw) data ---

class MetaTag(BaseModel):
    """A <meta> element with a name or property and a content attribute."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: Optional[str] = None
    property: Optional[str] = None
    content: str = ""              # HTML entities already decoded


class CollectedData(BaseModel):
    """
    Immutable snapshot produced by the single collection pass.

    Built from the original document before any removal or standardization
    runs, so metadata never depends on how aggressively content is stripped.
    """
    model_config = ConfigDict(frozen=True)

    meta_tags: tuple[MetaTag, ...] = ()         # document order, duplicates kept
    schema_org_data: tuple[Any, ...] = ()       # JSON-LD entries, @graph flattened
    title: Optional[str] = None                 # trimmed <title> text
    favicon: Optional[str] = None
    mini_app_embed: Optional[str] = None        # raw fc:frame payload (unparsed JSON)


# --- Mini-app embed (fc:frame) ---

class MiniAppActionType(str, Enum):
    """Mini-app action type."""
    LAUNCH_FRAME = "launch_frame"
    VIEW_TOKEN = "view_token"


class MiniAppAction(BaseModel):
    model_config = CAMEL_CONFIG

    action_type: MiniAppActionType = Field(alias="type")
    url: Optional[str] = None
    name: Optional[str] = None
    splash_image_url: Optional[str] = None
    splash_background_color: Optional[str] = None


class MiniAppButton(BaseModel):
    model_config = CAMEL_CONFIG

    title: str
    action: MiniAppAction


class MiniAppEmbed(BaseModel):
    """Interactive card description found in the fc:frame meta tag."""
    model_config = CAMEL_CONFIG

    version: str
    image_url: str
    button: MiniAppButton


# --- Resolved metadata ---

class Metadata(BaseModel):
    """
    Resolved page metadata.

    String fields default to "" so resolution never fails; word_count and
    parse_time are filled in by the Pipeline Controller once the final
    content is known.
    """
    model_config = CAMEL_CONFIG

    title: str = ""
    description: str = ""
    domain: str = ""
    favicon: str = ""
    image: str = ""
    parse_time: int = 0                         # milliseconds
    published: str = ""
    author: str = ""
    site: str = ""
    schema_org_data: list[Any] = Field(default_factory=list)
    word_count: int = 0
    mini_app_embed: Optional[MiniAppEmbed] = None


# --- Site-specific extractor output ---

class ExtractedContent(BaseModel):
    """
    Output of a site-specific extractor.

    Present fields override the resolver's values; absent (None) fields
    leave them untouched.
    """
    title: Optional[str] = None
    author: Optional[str] = None
    published: Optional[str] = None
    content: Optional[str] = None               # plain text
    content_html: Optional[str] = None
    variables: Optional[dict[str, str]] = None


# --- Options and response ---

class TrekOptions(BaseModel):
    """Per-instance options; wire names are camelCase."""
    model_config = CAMEL_CONFIG

    debug: bool = False                         # skip lossy normalization passes
    url: Optional[str] = None
    markdown: bool = False                      # replace content with Markdown
    separate_markdown: bool = False             # add Markdown alongside the HTML
    remove_exact_selectors: bool = True
    remove_partial_selectors: bool = True

    @property
    def removal_enabled(self) -> bool:
        return self.remove_exact_selectors or self.remove_partial_selectors


class Response(BaseModel):
    """Final product of one parse() call. Never mutated after construction."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    content: str = ""
    content_markdown: Optional[str] = None
    extractor_type: Optional[str] = None
    meta_tags: list[MetaTag] = Field(default_factory=list)
    metadata: Metadata = Field(default_factory=Metadata)

    def to_dict(self) -> dict:
        """Serialize with camelCase keys, metadata flattened next to content."""
        data = {
            "content": self.content,
            "contentMarkdown": self.content_markdown,
            "extractorType": self.extractor_type,
            "metaTags": [tag.model_dump(mode="json", by_alias=True) for tag in self.meta_tags],
        }
        data.update(self.metadata.model_dump(mode="json", by_alias=True))
        return data
