#!/usr/bin/env python3
"""
featuregraph - builds navigable feature graphs from Gherkin feature files
Main entry point: parses a features directory and prints a summary of the graph
"""

import logging
import sys

import click
from colorama import Fore, init
from dotenv import load_dotenv

from featuregraph.core.config_manager import ConfigManager
from featuregraph.core.errors import FeatureGraphError
from featuregraph.core.filter_policy import FilterPolicy
from featuregraph.models.feature import Feature
from featuregraph.parser.feature_parser import FeatureParser
from featuregraph.utils.logger import set_level, setup_logger

logger = setup_logger("featuregraph.cli")


def describe_feature(feature: Feature) -> str:
    outlines = feature.outlines
    examples = sum(outline.example_count for outline in outlines)
    parts = [
        f"{feature.file}:{feature.line}",
        f"{Fore.GREEN}{feature.keyword}: {feature.value}{Fore.RESET}",
        f"{len(feature.scenarios) - len(outlines)} scenarios",
        f"{len(outlines)} outlines ({examples} examples)",
    ]
    if feature.background is not None:
        parts.append("background")
    if feature.tags:
        parts.append(" ".join(tag.value for tag in feature.tags))
    return "\t".join(parts)


@click.command()
@click.option('--features', '-f', default='features', help='Feature file or directory of feature files')
@click.option('--config', '-c', default='config/config.yaml', help='Path to config file')
@click.option('--env', '-e', default=None, help='Environment overlay to apply to the config')
@click.option('--exclude-tag', '-x', multiple=True, help='Tag to exclude, in addition to the config')
@click.option('--show-tags', is_flag=True, help='Print the tag index after the features')
@click.option('--strict', is_flag=True, help='Exit with an error when any file has syntax errors')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(features, config, env, exclude_tag, show_tags, strict, verbose):
    """
    Build feature graphs from Gherkin files

    Examples:
        # Summarise every feature below ./features
        featuregraph --features features

        # Leave out work in progress and list the tags
        featuregraph -x wip --show-tags
    """
    load_dotenv()
    init()

    if verbose:
        set_level(logging.DEBUG)

    try:
        config_data = ConfigManager(config, env).load_config()
        policy = FilterPolicy.from_config(config_data, extra=exclude_tag)
        parser = FeatureParser(features, filter_policy=policy)
        parsed = parser.parse_features()
    except (FeatureGraphError, OSError) as e:
        logger.error(f"Execution failed: {e}")
        sys.exit(1)

    for feature in parsed:
        click.echo(describe_feature(feature))

    for diagnostic in parser.diagnostics:
        click.echo(f"{Fore.RED}error{Fore.RESET}\t{diagnostic.to_text()}")

    if show_tags:
        for tag in sorted(parser.registry, key=lambda t: t.name):
            click.echo(f"{tag.value}\t{len(tag.owners)} owners\t{len(tag.files)} uses")

    if strict and parser.diagnostics:
        sys.exit(1)


if __name__ == '__main__':
    main()
