"""Shared fixtures: parse events shaped like gherkin-official output"""
import pytest

from featuregraph.core.tag_registry import TagRegistry


class GherkinEvents:
    """Builds document dicts the way gherkin.parser.Parser returns them"""

    def location(self, line, column=1):
        return {"line": line, "column": column}

    def tags(self, names, line):
        return [{"name": name, "location": self.location(line), "id": name} for name in names]

    def row(self, values, line):
        return {"location": self.location(line),
                "cells": [{"location": self.location(line), "value": value} for value in values]}

    def step(self, text, line, keyword="Given ", table=None, doc_string=None):
        event = {"location": self.location(line, 5), "keyword": keyword, "text": text}
        if table is not None:
            event["dataTable"] = {"location": self.location(line + 1),
                                  "rows": [self.row(values, line + 1 + i) for i, values in enumerate(table)]}
        if doc_string is not None:
            event["docString"] = {"location": self.location(line + 1), "content": doc_string,
                                  "delimiter": '"""'}
        return event

    def scenario(self, name, line, steps=(), tags=(), examples=(), keyword="Scenario"):
        return {"scenario": {
            "location": self.location(line, 3),
            "keyword": keyword,
            "name": name,
            "description": "",
            "tags": self.tags(tags, line - 1),
            "steps": list(steps),
            "examples": list(examples),
        }}

    def outline(self, name, line, steps=(), examples=(), tags=()):
        return self.scenario(name, line, steps=steps, tags=tags, examples=examples,
                             keyword="Scenario Outline")

    def background(self, line, steps=(), name=""):
        return {"background": {"location": self.location(line, 3), "keyword": "Background",
                               "name": name, "description": "", "steps": list(steps)}}

    def rule(self, name, line, children=(), tags=()):
        return {"rule": {"location": self.location(line, 3), "keyword": "Rule", "name": name,
                         "description": "", "tags": self.tags(tags, line - 1),
                         "children": list(children)}}

    def examples(self, line, header=None, rows=(), name=""):
        return {
            "location": self.location(line, 5),
            "keyword": "Examples",
            "name": name,
            "description": "",
            "tags": [],
            "tableHeader": self.row(header, line + 1) if header is not None else None,
            "tableBody": [self.row(values, line + 2 + i) for i, values in enumerate(rows)],
        }

    def document(self, name="Shopping", children=(), tags=(), line=2, description=""):
        return {
            "feature": {
                "location": self.location(line),
                "language": "en",
                "keyword": "Feature",
                "name": name,
                "description": description,
                "tags": self.tags(tags, line - 1),
                "children": list(children),
            },
            "comments": [],
        }


@pytest.fixture
def events():
    return GherkinEvents()


@pytest.fixture
def registry():
    return TagRegistry()
