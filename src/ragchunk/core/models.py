from enum import Enum

from pydantic import BaseModel, ConfigDict


class SourceCategory(str, Enum):
    """Declared content kind of a document; selects a chunking strategy."""

    GLOSSARY = "glossary"
    KNOWLEDGE = "knowledge"
    DOC = "doc"
    CODE = "code"
    CONTRACT = "contract"
    SCRIPT = "script"
    PLUGIN = "plugin"
    OTHER = "other"


class SourceDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    category: SourceCategory = SourceCategory.OTHER
    path: str | None = None  # dialect hint only, never opened
    source_name: str | None = None  # label used in chunk context


class Chunk(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    content: str
    token_count: int
    context: str | None = None  # prefix for the embedding input
