"""Builds navigable feature graphs from parsed Gherkin documents"""
from featuregraph.core.filter_policy import FilterPolicy
from featuregraph.core.tag_registry import TagRegistry
from featuregraph.parser.feature_builder import FeatureBuilder
from featuregraph.parser.feature_parser import FeatureParser

__version__ = "1.0.0"

__all__ = ["FeatureBuilder", "FeatureParser", "FilterPolicy", "TagRegistry"]
