"""
tracegrid.keywords - Keyword table for every artifact file kind.

Each artifact file kind (``.req``, ``.tst``, ...) declares which keywords it
allows and what each keyword means. The traceability engine only cares about
keywords typed RELATION; everything else is kept so the table stays a
faithful description of the modeling language.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class KeywordType(Enum):
    HEADER_DEFINITION = "header-definition"
    DEFINITION = "definition"
    PROPERTY = "property"
    RELATION = "relation"
    REFERENCE = "reference"
    DIRECTION = "direction"
    ENUM = "enum"
    OPTIONAL_FLAG = "optional-flag"
    CONFIG = "config"


@dataclass(frozen=True)
class Keyword:
    name: str
    type: KeywordType
    description: str = ""


@dataclass(frozen=True)
class FileTypeKeywords:
    """Keywords allowed in one artifact file kind.

    Attributes:
        file_extension: File kind, e.g. ".req"
        display_name: Human readable name, e.g. "Requirements"
        header_keyword: Keyword naming the header definition
        allowed_keywords: Every keyword the file kind accepts
    """

    file_extension: str
    display_name: str
    header_keyword: str
    allowed_keywords: tuple[Keyword, ...] = field(default_factory=tuple)

    def relation_names(self) -> list[str]:
        """Names of relation-typed keywords, in declaration order."""
        return [k.name for k in self.allowed_keywords if k.type is KeywordType.RELATION]


def _kw(entries: str) -> tuple[Keyword, ...]:
    """Expand a compact ``name:type`` listing into Keyword entries."""
    keywords = []
    for entry in entries.split():
        name, _, type_name = entry.partition(":")
        keywords.append(Keyword(name, KeywordType(type_name)))
    return tuple(keywords)


_COMMON_HEADER = "use:reference hdef:header-definition name:property description:property owner:property tags:property"

FILE_TYPES: tuple[FileTypeKeywords, ...] = (
    FileTypeKeywords(
        ".ple",
        "Product Line",
        "productline",
        _kw(
            "hdef:header-definition productline:header-definition name:property "
            "description:property owner:property domain:property compliance:property "
            "firstrelease:property tags:property safetylevel:enum status:enum region:property"
        ),
    ),
    FileTypeKeywords(
        ".fml",
        "Feature Model",
        "featureset",
        _kw(
            f"{_COMMON_HEADER} featureset:header-definition listedfor:relation "
            "safetylevel:enum status:enum def:definition feature:definition "
            "mandatory:optional-flag optional:optional-flag or:optional-flag "
            "alternative:optional-flag requires:relation excludes:relation "
            "ref:reference productline:reference inherits:relation"
        ),
    ),
    FileTypeKeywords(
        ".vml",
        "Variant Model",
        "variantset",
        _kw(
            f"{_COMMON_HEADER} variantset:header-definition status:enum ref:reference "
            "feature:reference extends:relation mandatory:optional-flag "
            "optional:optional-flag or:optional-flag alternative:optional-flag "
            "selected:optional-flag featureset:reference inherits:relation"
        ),
    ),
    FileTypeKeywords(
        ".vcf",
        "Variant Config",
        "configset",
        _kw(
            f"{_COMMON_HEADER} configset:header-definition generatedfrom:relation "
            "generatedat:property status:enum def:definition config:config "
            "variantset:reference inherits:relation"
        ),
    ),
    FileTypeKeywords(
        ".fun",
        "Function Group",
        "functionset",
        _kw(
            f"{_COMMON_HEADER} functionset:header-definition safetylevel:enum status:enum "
            "def:definition function:definition enables:relation feature:reference "
            "allocatedto:relation block:reference ref:reference config:config "
            "when:relation featureset:reference configset:reference"
        ),
    ),
    FileTypeKeywords(
        ".req",
        "Requirements",
        "requirementset",
        _kw(
            f"{_COMMON_HEADER} requirementset:header-definition safetylevel:enum "
            "def:definition requirement:definition refinedfrom:relation "
            "derivedfrom:relation implements:relation function:reference "
            "allocatedto:relation block:reference ref:reference config:config "
            "when:relation rationale:property verificationcriteria:property "
            "status:enum reqtype:enum functiongroup:reference configset:reference"
        ),
    ),
    FileTypeKeywords(
        ".tst",
        "Test Suite",
        "testset",
        _kw(
            f"{_COMMON_HEADER} testset:header-definition safetylevel:enum status:enum "
            "def:definition testcase:definition refinedfrom:relation "
            "derivedfrom:relation requirement:reference satisfies:relation "
            "ref:reference config:config when:relation expected:property "
            "passcriteria:property testresult:enum steps:property method:enum "
            "setup:property requirementset:reference configset:reference"
        ),
    ),
    FileTypeKeywords(
        ".blk",
        "Block",
        "block",
        _kw(
            f"{_COMMON_HEADER} block:header-definition designrationale:property "
            "level:enum safetylevel:enum status:enum def:definition port:definition "
            "porttype:enum composedof:relation enables:relation needs:relation "
            "feature:reference ref:reference config:config when:relation "
            "featureset:reference configset:reference"
        ),
    ),
    FileTypeKeywords(
        ".spr",
        "Sprint",
        "sprint",
        _kw(
            "use:reference agentset:header-definition hdef:header-definition "
            "sprint:header-definition name:property description:property "
            "owner:property startdate:property enddate:property assignedto:relation "
            "ref:reference agent:reference issuestatus:enum priority:enum "
            "points:property outputfile:property def:definition epic:definition "
            "story:definition task:definition"
        ),
    ),
    FileTypeKeywords(
        ".agt",
        "Agent",
        "agentset",
        _kw(
            "use:reference hdef:header-definition agentset:header-definition "
            "name:property description:property owner:property def:definition "
            "agent:definition role:property specialization:property "
            "expertise:property context:property"
        ),
    ),
)

# Project-planning artifacts carry no engineering traceability.
PLANNING_FILE_KINDS: frozenset[str] = frozenset({".spr", ".agt"})


def get_file_type(file_extension: str) -> FileTypeKeywords | None:
    """Look up the keyword table for a file kind such as ".req"."""
    for file_type in FILE_TYPES:
        if file_type.file_extension == file_extension:
            return file_type
    return None


__all__ = [
    "KeywordType",
    "Keyword",
    "FileTypeKeywords",
    "FILE_TYPES",
    "PLANNING_FILE_KINDS",
    "get_file_type",
]
