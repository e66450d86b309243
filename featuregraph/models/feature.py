"""
Feature object graph
Features, scenarios, outlines, examples, steps and the tags shared between them
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from featuregraph.utils.helpers import Table, values_dict


@dataclass(eq=False)
class Tag:
    """A tag shared by every feature and scenario that declares it during a run"""
    name: str
    value: str
    owners: List[Union["Feature", "Scenario"]] = field(default_factory=list, repr=False)
    files: List[Tuple[str, int]] = field(default_factory=list)

    def add_file(self, file: str, line: int) -> None:
        self.files.append((file, line))

    def add_owner(self, owner: Union["Feature", "Scenario"]) -> bool:
        """Add an owner once; returns False when it was already known"""
        if any(existing is owner for existing in self.owners):
            return False
        self.owners.append(owner)
        return True

    @property
    def features(self) -> List["Feature"]:
        return [owner for owner in self.owners if isinstance(owner, Feature)]

    @property
    def scenarios(self) -> List["Scenario"]:
        return [owner for owner in self.owners if isinstance(owner, Scenario)]


@dataclass(eq=False)
class Step:
    name: str
    keyword: str = ""
    value: str = ""
    comments: str = ""
    file: str = ""
    line: int = 0
    text: Optional[str] = None
    table: Optional[Table] = None
    scenario: Optional["Scenario"] = field(default=None, repr=False)

    @property
    def has_text(self) -> bool:
        return self.text is not None

    @property
    def has_table(self) -> bool:
        return self.table is not None


@dataclass(eq=False)
class Examples:
    """Examples block of a scenario outline; the first row is the header"""
    keyword: str = ""
    name: str = ""
    comments: str = ""
    file: str = ""
    line: int = 0
    rows: Table = field(default_factory=list)

    @property
    def headers(self) -> List[str]:
        return self.rows[0] if self.rows else []

    @property
    def data(self) -> Table:
        return self.rows[1:]

    def values_for_row(self, index: int) -> Dict[str, str]:
        return values_dict(self.headers, self.data[index])


@dataclass(eq=False)
class Scenario:
    """A scenario, a background or one generated instance of an outline"""
    name: str
    keyword: str = ""
    value: str = ""
    description: str = ""
    comments: str = ""
    file: str = ""
    line: int = 0
    tags: List[Tag] = field(default_factory=list)
    steps: List[Step] = field(default_factory=list)
    scenarios: List["Scenario"] = field(default_factory=list)
    examples: List[Examples] = field(default_factory=list)
    feature: Optional["Feature"] = field(default=None, repr=False)
    outline: Optional["ScenarioOutline"] = field(default=None, repr=False)

    def add_step(self, step: Step) -> Step:
        step.scenario = self
        self.steps.append(step)
        return step

    @property
    def is_background(self) -> bool:
        return self.feature is not None and self.feature.background is self

    @property
    def is_outline(self) -> bool:
        return False


@dataclass(eq=False)
class ScenarioOutline(Scenario):
    """Scenario template expanded into one scenario per examples row"""

    @property
    def is_outline(self) -> bool:
        return True

    @property
    def example_count(self) -> int:
        return sum(len(example.data) for example in self.examples)


@dataclass(eq=False)
class Feature:
    name: str
    keyword: str = ""
    value: str = ""
    description: str = ""
    comments: str = ""
    file: str = ""
    line: int = 0
    tags: List[Tag] = field(default_factory=list)
    scenarios: List[Scenario] = field(default_factory=list)
    background: Optional[Scenario] = None

    def add_scenario(self, scenario: Scenario) -> Scenario:
        scenario.feature = self
        self.scenarios.append(scenario)
        return scenario

    @property
    def outlines(self) -> List[ScenarioOutline]:
        return [scenario for scenario in self.scenarios if scenario.is_outline]
