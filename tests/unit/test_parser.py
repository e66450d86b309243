"""Unit tests for feature parser"""
from textwrap import dedent

from featuregraph.core.filter_policy import FilterPolicy
from featuregraph.parser.feature_parser import Diagnostic, FeatureParser, attach_comments

CART = dedent('''\
    @cart
    Feature: Cart
      Keeping track of things to buy

      # shared setup
      Background:
        Given an empty cart

      # the simple case
      @smoke
      Scenario: Add one item
        # only one
        When I add "apple"
        Then the cart holds:
          | item  | count |
          | apple | 1     |

      Scenario Outline: Add many
        When I add <count> "<item>"
        Then the note says:
          """
          <count> x <item>
          """

        Examples: fruit
          | item  | count |
          | apple | 2     |
          | pear  |       |
    ''')


def test_parse_text_builds_graph(tmp_path):
    parser = FeatureParser(tmp_path)
    feature = parser.parse_text(CART, "features/cart.feature")

    assert feature.value == "Cart"
    assert feature.name == "cart"
    assert feature.description.strip() == "Keeping track of things to buy"
    assert [tag.value for tag in feature.tags] == ["@cart"]
    assert feature.background.steps[0].value == "an empty cart"
    assert [s.value for s in feature.scenarios] == ["Add one item", "Add many"]
    assert parser.diagnostics == []


def test_steps_and_arguments(tmp_path):
    feature = FeatureParser(tmp_path).parse_text(CART, "cart.feature")
    add_one = feature.scenarios[0]

    assert [step.keyword.strip() for step in add_one.steps] == ["When", "Then"]
    assert add_one.steps[0].value == 'I add "apple"'
    assert add_one.steps[1].table == [["item", "count"], ["apple", "1"]]
    assert add_one.steps[1].line == 14


def test_outline_expansion_from_text(tmp_path):
    feature = FeatureParser(tmp_path).parse_text(CART, "cart.feature")
    outline = feature.scenarios[1]

    assert outline.is_outline
    assert outline.examples[0].name == "fruit"
    assert [s.steps[0].value for s in outline.scenarios] == ['I add 2 "apple"', 'I add  "pear"']
    assert [s.steps[1].text for s in outline.scenarios] == ["2 x apple", " x pear"]
    assert outline.steps[1].text == "<count> x <item>"


def test_comments_are_attached_to_following_node(tmp_path):
    feature = FeatureParser(tmp_path).parse_text(CART, "cart.feature")

    assert feature.background.comments == "# shared setup"
    assert feature.scenarios[0].comments == "# the simple case"
    assert feature.scenarios[0].steps[0].comments == "# only one"
    assert feature.scenarios[0].steps[1].comments == ""


def test_attach_comments_ignores_trailing_comments():
    document = {
        "feature": {"location": {"line": 1}, "children": []},
        "comments": [{"location": {"line": 5}, "text": "# at the end"}],
    }
    attach_comments(document)

    assert "comments" not in document["feature"]


def test_syntax_error_becomes_diagnostic(tmp_path):
    text = dedent('''\
        Feature: Broken
          Scenario: Oops
            Given a step
          this line is not gherkin
        ''')
    parser = FeatureParser(tmp_path)

    assert parser.parse_text(text, "broken.feature") is None
    assert len(parser.diagnostics) >= 1
    diagnostic = parser.diagnostics[0]
    assert isinstance(diagnostic, Diagnostic)
    assert diagnostic.file == "broken.feature"
    assert diagnostic.line == 4
    assert "this line is not gherkin" in diagnostic.message
    assert diagnostic.to_text().startswith("broken.feature:4:")


def test_document_without_feature(tmp_path):
    parser = FeatureParser(tmp_path)

    assert parser.parse_text("# nothing here\n", "empty.feature") is None
    assert parser.diagnostics == []


def test_exclusion_through_parser(tmp_path):
    parser = FeatureParser(tmp_path, filter_policy=FilterPolicy(["smoke"]))
    feature = parser.parse_text(CART, "cart.feature")

    assert [s.value for s in feature.scenarios] == ["Add many"]
    assert "smoke" not in parser.registry
    assert "cart" in parser.registry


def test_parse_single_file(tmp_path):
    path = tmp_path / "cart.feature"
    path.write_text(CART, encoding="utf-8")
    parser = FeatureParser(path)

    features = parser.parse_features()

    assert len(features) == 1
    assert features[0].file == path.as_posix()


RULES = dedent('''\
    Feature: Accounts

      Background:
        Given a bank

      Scenario: Open an account
        When I open an account

      @limits
      Rule: Withdrawals stay within the balance

        Background:
          Given a balance of 10

        # over the limit
        @negative
        Scenario: Withdraw too much
          When I withdraw 20
          Then I am refused

        Scenario Outline: Withdraw some
          When I withdraw <amount>

          Examples:
            | amount |
            | 5      |
            | 10     |

      @legacy
      Rule: Old rules
        Scenario: Fax a cheque
          When I fax a cheque
    ''')


def test_rule_children_are_built(tmp_path):
    parser = FeatureParser(tmp_path, filter_policy=FilterPolicy(["legacy"]))
    feature = parser.parse_text(RULES, "accounts.feature")

    assert [s.value for s in feature.scenarios] == ["Open an account", "Withdraw too much",
                                                    "Withdraw some"]
    assert [s.name for s in feature.scenarios] == ["scenario_1", "scenario_2", "scenario_3"]
    assert all(s.feature is feature for s in feature.scenarios)

    too_much = feature.scenarios[1]
    assert [tag.name for tag in too_much.tags] == ["negative"]
    assert parser.registry.get("negative").owners == [too_much]
    assert too_much.comments == "# over the limit"

    outline = feature.scenarios[2]
    assert outline.is_outline
    assert [s.steps[0].value for s in outline.scenarios] == ["I withdraw 5", "I withdraw 10"]

    # the feature background wins over the rule background
    assert feature.background.steps[0].value == "a bank"
    assert "legacy" not in parser.registry
    assert parser.diagnostics == []
