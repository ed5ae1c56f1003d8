from typing import Any, Callable, Literal, Mapping, Optional, Protocol, Sequence, TypeAlias, TypedDict
from typing_extensions import NotRequired
from .dataclasses import TraceEvent

NestedTextPolicy: TypeAlias = Literal["include", "exclude"]
TraceSink: TypeAlias = Callable[[TraceEvent], None]


class TreeNode(Protocol):
    """
    Read-only view over one node of a parsed HTML document.
    Text nodes return None from `tag_name()` and have no children.
    """

    def tag_name(self) -> Optional[str]: ...

    def attributes(self) -> Mapping[str, str]: ...

    def children(self) -> Sequence["TreeNode"]: ...

    def text_content(self) -> str: ...


class TableConfig(TypedDict, total=False):

    nested_table_text: NotRequired[NestedTextPolicy]
    skip_empty_tables: NotRequired[bool]
    max_workers: NotRequired[int]


class ExtractorConfig(TypedDict, total=False):

    beautifulsoup: NotRequired[dict[str, Any]]
    file: NotRequired[dict[str, Any]]
    requests: NotRequired[dict[str, Any]]
    tables: NotRequired[TableConfig]
