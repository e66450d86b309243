"""
Feature parser
Reads Gherkin feature files with gherkin-official and builds their feature graphs
"""
from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Union

from gherkin.errors import CompositeParserException, ParserError
from gherkin.parser import Parser
from gherkin.token_scanner import TokenScanner

from featuregraph.core.filter_policy import FilterPolicy
from featuregraph.core.tag_registry import TagRegistry
from featuregraph.models.feature import Feature
from featuregraph.parser.feature_builder import FeatureBuilder, child_kind, rule_children
from featuregraph.utils.helpers import line_of
from featuregraph.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class Diagnostic:
    """A syntax error reported by the Gherkin parser, or a file that could not be decoded"""
    file: str
    line: int
    column: int
    message: str

    def to_text(self) -> str:
        return f"{self.file}:{self.line}:{self.column}\t{self.message}"


def _statement_nodes(children: List[Dict[str, Any]]) -> List[MutableMapping[str, Any]]:
    nodes: List[MutableMapping[str, Any]] = []
    for child in children:
        nested = rule_children(child)
        if nested is not None:
            nodes.append(child["rule"])
            nodes.extend(_statement_nodes(nested))
            continue

        resolved = child_kind(child)
        if resolved is None:
            continue
        _, statement = resolved
        nodes.append(statement)
        nodes.extend(statement.get("steps") or [])
        nodes.extend(statement.get("examples") or [])
    return nodes


def attach_comments(document: Dict[str, Any]) -> None:
    """Hand each document level comment to the first node that starts after it"""
    comments = document.get("comments") or []
    feature = document.get("feature")
    if not comments or not feature:
        return

    nodes: List[MutableMapping[str, Any]] = [feature]
    nodes.extend(_statement_nodes(feature.get("children") or []))

    nodes.sort(key=line_of)
    lines = [line_of(node) for node in nodes]

    for comment in comments:
        index = bisect_right(lines, line_of(comment))
        if index < len(nodes):
            nodes[index].setdefault("comments", []).append(comment)


class FeatureParser:
    """Parse Gherkin feature files into linked feature graphs"""

    def __init__(self, features_path: Union[str, Path], filter_policy: Optional[FilterPolicy] = None,
                 registry: Optional[TagRegistry] = None):
        self.features_path = Path(features_path)
        self.filter_policy = filter_policy if filter_policy is not None else FilterPolicy()
        self.registry = registry if registry is not None else TagRegistry()
        self.diagnostics: List[Diagnostic] = []

    def feature_files(self) -> List[Path]:
        if self.features_path.is_dir():
            return sorted(self.features_path.glob("**/*.feature"))
        return [self.features_path]

    def parse_features(self) -> List[Feature]:
        """Parse all feature files below the features path"""
        features = []

        for feature_file in self.feature_files():
            feature = self.parse_file(feature_file)
            if feature is not None:
                features.append(feature)

        logger.info(f"Parsed {len(features)} features from {self.features_path}, "
                    f"{len(self.registry)} distinct tags")
        return features

    def parse_file(self, file_path: Union[str, Path]) -> Optional[Feature]:
        """Parse a single feature file"""
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except UnicodeDecodeError as e:
            diagnostic = Diagnostic(file=file_path.as_posix(), line=0, column=0, message=str(e))
            self.diagnostics.append(diagnostic)
            logger.warning(f"Unreadable feature file: {diagnostic.to_text()}")
            return None

        return self.parse_text(text, file_path.as_posix())

    def parse_text(self, text: str, file: str) -> Optional[Feature]:
        try:
            document = Parser().parse(TokenScanner(text))
        except ParserError as e:
            self._report(file, e)
            return None

        attach_comments(document)
        return FeatureBuilder(file, self.registry, self.filter_policy).assemble(document)

    def _report(self, file: str, error: ParserError) -> None:
        errors = error.errors if isinstance(error, CompositeParserException) else [error]

        for item in errors:
            location = getattr(item, "location", None) or {}
            diagnostic = Diagnostic(
                file=file,
                line=int(location.get("line") or 0),
                column=int(location.get("column") or 0),
                message=str(item),
            )
            self.diagnostics.append(diagnostic)
            logger.warning(f"Syntax error: {diagnostic.to_text()}")
