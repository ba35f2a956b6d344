import pytest

from typing import Any, Sequence

from recipe_md.errors import (
    IngredientSyntaxError,
    RecipeParseError,
    StructureError,
)
from recipe_md.units import Custom, Mass, Nominal, Volume
from recipe_md.quantity import Quantity
from recipe_md.markdown import parse_markdown
from recipe_md.markdown.common import block_children
from recipe_md.ingredients import (
    Ingredient,
    IngredientOptions,
    IngredientList,
    IngredientGroup,
    IngredientGroups,
    parse_ingredients,
)


class TestIngredient:
    @pytest.mark.parametrize(
        "text, exp",
        [
            # Name only
            ("Lemons", Ingredient("Lemons")),
            ("  Lemons  ", Ingredient("Lemons")),
            # Nominal quantity
            ("Lemons, 1", Ingredient("Lemons", Quantity(Nominal.nominal, 1.0))),
            # Units, with or without spaces
            ("Milk, 50 mL", Ingredient("Milk", Quantity(Volume.milliliter, 50.0))),
            (
                "   Milk   ,  50mL  ",
                Ingredient("Milk", Quantity(Volume.milliliter, 50.0)),
            ),
            # Custom units
            ("Basil, 1 bunch", Ingredient("Basil", Quantity(Custom("bunch"), 1.0))),
            # Info
            (
                "name, 1 tbsp (optional, spicy)",
                Ingredient(
                    "name",
                    Quantity(Volume.tablespoon, 1.0),
                    info="optional, spicy",
                ),
            ),
            ("Salt (to taste)", Ingredient("Salt", info="to taste")),
            # Alternative quantities
            (
                "name, 15mL / 3 tsp / 1tbsp",
                Ingredient(
                    "name",
                    Quantity(Volume.milliliter, 15.0),
                    (
                        Quantity(Volume.teaspoon, 3.0),
                        Quantity(Volume.tablespoon, 1.0),
                    ),
                ),
            ),
            # Everything
            (
                "Butter, 100g / 4 oz (softened)",
                Ingredient(
                    "Butter",
                    Quantity(Mass.gram, 100.0),
                    (Quantity(Mass.ounce, 4.0),),
                    "softened",
                ),
            ),
        ],
    )
    def test_valid(self, text: str, exp: Ingredient) -> None:
        assert Ingredient.from_str(text) == exp

    @pytest.mark.parametrize(
        "text",
        [
            # Empty name
            ", 15mL",
            "",
            "   ",
            " (info)",
            # Forbidden characters in name
            "na|me, 15mL",
            "na/me, 15mL",
            "na)me",
            # Stray letter in amount
            "name, a15mL",
            # Doubled quantity
            "name, 15mL, 15mL",
            # Dangling alternative quantity separator
            "name, 15mL / ",
            "name, / 15mL",
            # Unmatched parentheses
            "name, 15mL (info",
            "name, 15mL info)",
            # Nested parentheses
            "name, 15mL (a (b))",
            # Invalid amount
            "name, 1.2.3 ml",
            "name, ",
        ],
    )
    def test_invalid(self, text: str) -> None:
        with pytest.raises(IngredientSyntaxError) as excinfo:
            Ingredient.from_str(text)
        assert excinfo.value.text == text

    def test_invalid_quantity_cause(self) -> None:
        with pytest.raises(IngredientSyntaxError) as excinfo:
            Ingredient.from_str("name, 1.2.3 ml")
        assert isinstance(excinfo.value.__cause__, RecipeParseError)


class TestIngredientOptions:
    def test_single(self) -> None:
        assert IngredientOptions.from_str("Butter, 50g") == IngredientOptions(
            Ingredient("Butter", Quantity(Mass.gram, 50.0))
        )

    def test_alternatives(self) -> None:
        assert IngredientOptions.from_str(
            "Butter, 50g | Margarine, 50g | Lard"
        ) == IngredientOptions(
            Ingredient("Butter", Quantity(Mass.gram, 50.0)),
            (
                Ingredient("Margarine", Quantity(Mass.gram, 50.0)),
                Ingredient("Lard"),
            ),
        )

    @pytest.mark.parametrize("text", ["Butter |", "| Butter", "Butter || Lard"])
    def test_empty_alternative(self, text: str) -> None:
        with pytest.raises(IngredientSyntaxError):
            IngredientOptions.from_str(text)


def parse(source: str) -> Sequence[Any]:
    return block_children(parse_markdown(source))


class TestParseIngredients:
    def test_empty(self) -> None:
        assert parse_ingredients([]) == IngredientList()

    def test_list(self) -> None:
        assert parse_ingredients(
            parse("- Eggs, 2\n- Milk, 50 mL | Water\n")
        ) == IngredientList(
            (
                IngredientOptions(Ingredient("Eggs", Quantity(Nominal.nominal, 2.0))),
                IngredientOptions(
                    Ingredient("Milk", Quantity(Volume.milliliter, 50.0)),
                    (Ingredient("Water"),),
                ),
            )
        )

    def test_groups(self) -> None:
        source = (
            "### Sauce\n"
            "- Tomatoes, 400g\n"
            "\n"
            "### Pasta\n"
            "- Spaghetti, 150g\n"
            "- Salt\n"
        )
        assert parse_ingredients(parse(source)) == IngredientGroups(
            (
                IngredientGroup(
                    "Sauce",
                    (
                        IngredientOptions(
                            Ingredient("Tomatoes", Quantity(Mass.gram, 400.0))
                        ),
                    ),
                ),
                IngredientGroup(
                    "Pasta",
                    (
                        IngredientOptions(
                            Ingredient("Spaghetti", Quantity(Mass.gram, 150.0))
                        ),
                        IngredientOptions(Ingredient("Salt")),
                    ),
                ),
            )
        )

    def test_wrapped_ingredient(self) -> None:
        assert parse_ingredients(parse("- Milk,\n  50 mL\n")) == IngredientList(
            (IngredientOptions(Ingredient("Milk", Quantity(Volume.milliliter, 50.0))),)
        )

    def test_entities_and_escapes(self) -> None:
        assert parse_ingredients(
            parse("- Salt &amp; pepper\n- Fish \\& chips\n")
        ) == IngredientList(
            (
                IngredientOptions(Ingredient("Salt & pepper")),
                IngredientOptions(Ingredient("Fish & chips")),
            )
        )

    def test_malformed_group(self) -> None:
        source = "### Sauce\n- Tomatoes, 400g\n\n### Pasta\n"
        with pytest.raises(StructureError, match="Malformed ingredient group"):
            parse_ingredients(parse(source))

    @pytest.mark.parametrize(
        "source",
        [
            # Not a list
            "Some eggs\n",
            # Group without a list
            "### Sauce\n\nSome tomatoes\n",
            # Group name not a level 3 heading
            "#### Sauce\n- Tomatoes, 400g\n",
            # Formatting in ingredient
            "- *Eggs*, 2\n",
            # Two paragraphs in an item
            "- Eggs, 2\n\n  Milk, 1 cup\n",
        ],
    )
    def test_invalid_structure(self, source: str) -> None:
        with pytest.raises(StructureError):
            parse_ingredients(parse(source))

    def test_syntax_error_position(self) -> None:
        with pytest.raises(IngredientSyntaxError) as excinfo:
            parse_ingredients(parse("- Eggs, 2\n- Milk, 1.2.3 ml\n"))
        assert excinfo.value.position is not None
        assert excinfo.value.position.line == 2
