from featuregraph.models.feature import Examples, Feature, Scenario, ScenarioOutline, Step, Tag

__all__ = ["Examples", "Feature", "Scenario", "ScenarioOutline", "Step", "Tag"]
