"""
Feature graph builder
Turns one parsed Gherkin document into a linked Feature object graph and
expands scenario outlines into concrete scenarios
"""
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from featuregraph.core.errors import TableShapeError
from featuregraph.core.filter_policy import FilterPolicy
from featuregraph.core.tag_registry import TagRegistry
from featuregraph.models.feature import Examples, Feature, Scenario, ScenarioOutline, Step
from featuregraph.utils.helpers import (
    Table,
    join_comments,
    line_of,
    matrix,
    object_name_for,
    substitute_placeholders,
    substitute_table,
    tag_names,
)
from featuregraph.utils.logger import setup_logger

logger = setup_logger(__name__)

Event = Mapping[str, Any]


class ChildKind(Enum):
    BACKGROUND = "background"
    SCENARIO = "scenario"
    SCENARIO_OUTLINE = "scenario_outline"


class ArgumentKind(Enum):
    DOC_STRING = "doc_string"
    DATA_TABLE = "data_table"


# kind-tagged events carry a "type" instead of a wrapping key
_TYPED_CHILDREN = {
    "Background": ChildKind.BACKGROUND,
    "Scenario": ChildKind.SCENARIO,
    "ScenarioOutline": ChildKind.SCENARIO_OUTLINE,
}
_TYPED_ARGUMENTS = {
    "DocString": ArgumentKind.DOC_STRING,
    "DataTable": ArgumentKind.DATA_TABLE,
}


def child_kind(child: Event) -> Optional[Tuple[ChildKind, Event]]:
    """Resolve a feature child into its kind and its statement"""
    if "background" in child:
        return ChildKind.BACKGROUND, child["background"]
    if "scenarioOutline" in child:
        return ChildKind.SCENARIO_OUTLINE, child["scenarioOutline"]
    if "scenario" in child:
        statement = child["scenario"]
        # gherkin reports outlines as scenarios that own examples
        if statement.get("examples"):
            return ChildKind.SCENARIO_OUTLINE, statement
        return ChildKind.SCENARIO, statement

    kind = _TYPED_CHILDREN.get(str(child.get("type", "")))
    if kind is not None:
        return kind, child
    return None


def rule_children(child: Event) -> Optional[List[Event]]:
    """Children of a rule block, None when the child is not a rule"""
    rule = child.get("rule")
    if rule is None:
        return None
    return list(rule.get("children") or [])


def multiline_argument(step_event: Event) -> Optional[Tuple[ArgumentKind, Event]]:
    if step_event.get("docString") is not None:
        return ArgumentKind.DOC_STRING, step_event["docString"]
    if step_event.get("dataTable") is not None:
        return ArgumentKind.DATA_TABLE, step_event["dataTable"]

    argument = step_event.get("argument")
    if argument:
        kind = _TYPED_ARGUMENTS.get(str(argument.get("type", "")))
        if kind is not None:
            return kind, argument
    return None


def examples_rows(examples_event: Event, file: str) -> Table:
    """Header row followed by the data rows of an examples block"""
    header = examples_event.get("tableHeader")
    body = matrix(examples_event.get("tableBody") or [])

    if not header:
        if body:
            raise TableShapeError(file, line_of(examples_event), 0, len(body[0]))
        return []

    headers = matrix([header])[0]
    for row in body:
        if len(row) != len(headers):
            raise TableShapeError(file, line_of(examples_event), len(headers), len(row))

    return [headers] + body


def expand_step(template: Step, values: Mapping[str, str]) -> Step:
    """New step from a template with the row values substituted.

    The template is never modified; text and table are fresh copies.
    """
    step = Step(
        name=template.name,
        keyword=template.keyword,
        value=substitute_placeholders(template.value, values),
        file=template.file,
        line=template.line,
    )

    if template.has_text:
        step.text = substitute_placeholders(template.text, values)
    if template.has_table:
        step.table = substitute_table(template.table, values)

    return step


class FeatureBuilder:
    """Builds the object graph of a single feature document"""

    def __init__(self, file: str, registry: Optional[TagRegistry] = None,
                 filter_policy: Optional[FilterPolicy] = None):
        self.file = str(file)
        self.registry = registry if registry is not None else TagRegistry()
        self.filter_policy = filter_policy if filter_policy is not None else FilterPolicy()
        self.feature: Optional[Feature] = None
        self._assembled = False

    def assemble(self, document: Optional[Event]) -> Optional[Feature]:
        """Build the feature of a document; later calls return the first result"""
        if self._assembled:
            return self.feature

        # a document that failed half way is not processed again
        try:
            self.feature = self._build_feature(document or {})
        finally:
            self._assembled = True
        return self.feature

    def _build_feature(self, document: Event) -> Optional[Feature]:
        feature_event = document.get("feature")
        if not feature_event:
            logger.debug(f"No feature in {self.file}")
            return None

        if self.filter_policy.is_excluded(tag_names(feature_event)):
            logger.debug(f"Feature in {self.file} excluded by tags")
            return None

        feature = Feature(
            name=object_name_for(self.file),
            keyword=feature_event.get("keyword", ""),
            value=feature_event.get("name", ""),
            description=feature_event.get("description") or "",
            comments=join_comments(feature_event.get("comments") or []),
            file=self.file,
            line=line_of(feature_event),
        )
        for tag in feature_event.get("tags") or []:
            self.registry.resolve(tag["name"], feature, self.file)

        self._build_children(feature_event.get("children") or [], feature)

        logger.info(f"Built feature '{feature.value}' from {self.file} "
                    f"with {len(feature.scenarios)} scenarios")
        return feature

    def _build_children(self, children: List[Event], feature: Feature, in_rule: bool = False) -> None:
        for child in children:
            nested = rule_children(child)
            if nested is not None:
                rule = child["rule"]
                if self.filter_policy.is_excluded(tag_names(rule)):
                    logger.debug(f"{self.file}:{line_of(rule)} rule '{rule.get('name', '')}' excluded by tags")
                    continue
                self._build_children(nested, feature, in_rule=True)
                continue

            resolved = child_kind(child)
            if resolved is None:
                logger.warning(f"{self.file}: skipping unsupported child {sorted(child)}")
                continue

            kind, statement = resolved
            if kind is ChildKind.BACKGROUND:
                if in_rule and feature.background is not None:
                    logger.warning(f"{self.file}:{line_of(statement)} rule background ignored, "
                                   f"feature already has one at line {feature.background.line}")
                    continue
                self.build_background(statement, feature)
            elif kind is ChildKind.SCENARIO:
                self.build_scenario(statement, feature)
            elif kind is ChildKind.SCENARIO_OUTLINE:
                self.build_outline(statement, feature)

    def build_background(self, statement: Event, feature: Feature) -> Scenario:
        background = Scenario(
            name="background",
            keyword=statement.get("keyword", ""),
            value=statement.get("name", ""),
            description=statement.get("description") or "",
            comments=join_comments(statement.get("comments") or []),
            file=self.file,
            line=line_of(statement),
        )
        feature.background = background
        background.feature = feature

        for step_event in statement.get("steps") or []:
            self.build_step(step_event, background)

        return background

    def build_scenario(self, statement: Event, feature: Feature) -> Optional[Scenario]:
        scenario = self._new_statement(Scenario, statement, feature)
        if scenario is None:
            return None

        for step_event in statement.get("steps") or []:
            self.build_step(step_event, scenario)

        return scenario

    def build_outline(self, statement: Event, feature: Feature) -> Optional[ScenarioOutline]:
        outline = self._new_statement(ScenarioOutline, statement, feature)
        if outline is None:
            return None

        # template steps have to exist before the examples are expanded
        for step_event in statement.get("steps") or []:
            self.build_step(step_event, outline)
        for examples_event in statement.get("examples") or []:
            self.expand(examples_event, outline)

        return outline

    def _new_statement(self, cls, statement: Event, feature: Feature):
        if self.filter_policy.is_excluded(tag_names(statement)):
            logger.debug(f"{self.file}:{line_of(statement)} '{statement.get('name', '')}' excluded by tags")
            return None

        scenario = cls(
            name=f"scenario_{len(feature.scenarios) + 1}",
            keyword=statement.get("keyword", ""),
            value=statement.get("name", ""),
            description=statement.get("description") or "",
            comments=join_comments(statement.get("comments") or []),
            file=self.file,
            line=line_of(statement),
        )
        for tag in statement.get("tags") or []:
            self.registry.resolve(tag["name"], scenario, self.file)

        feature.add_scenario(scenario)
        return scenario

    def expand(self, examples_event: Event, outline: ScenarioOutline) -> Examples:
        """Add an examples block to the outline and generate one scenario per data row"""
        example = Examples(
            keyword=examples_event.get("keyword", ""),
            name=examples_event.get("name", ""),
            comments=join_comments(examples_event.get("comments") or []),
            file=self.file,
            line=line_of(examples_event),
            rows=examples_rows(examples_event, self.file),
        )
        outline.examples.append(example)

        for row_index in range(len(example.data)):
            values = example.values_for_row(row_index)
            number = len(outline.scenarios) + 1

            scenario = Scenario(
                name=f"example_{number}",
                keyword=outline.keyword,
                value=f"{outline.value} ({number})",
                description=outline.description,
                comments=outline.comments,
                file=self.file,
                line=outline.line,
                outline=outline,
            )
            for template in outline.steps:
                scenario.add_step(expand_step(template, values))

            scenario.feature = outline.feature
            outline.scenarios.append(scenario)

        logger.debug(f"{self.file}:{example.line} expanded {len(example.data)} example rows "
                     f"for '{outline.value}'")
        return example

    def build_step(self, step_event: Event, container: Scenario) -> Step:
        line = line_of(step_event)
        step = Step(
            name=str(line),
            keyword=step_event.get("keyword", ""),
            value=step_event.get("text", ""),
            comments=join_comments(step_event.get("comments") or []),
            file=self.file,
            line=line,
        )

        argument = multiline_argument(step_event)
        if argument is not None:
            kind, payload = argument
            if kind is ArgumentKind.DOC_STRING:
                step.text = payload.get("content", "")
            elif kind is ArgumentKind.DATA_TABLE:
                step.table = matrix(payload.get("rows") or [])

        return container.add_step(step)
