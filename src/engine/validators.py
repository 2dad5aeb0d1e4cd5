"""
Element Alchemy - Catalog Validation Utilities

Validation for the static element and recipe catalogs. Malformed data raises
a descriptive ValueError at load time; authoring anomalies the game tolerates
(recipes pointing at unknown elements, shadowed duplicate pairs) are returned
so the caller can log them.
"""

from typing import Any, Sequence

from src.engine.base import Combination, Difficulty, Element


def validate_difficulty(value: Any) -> Difficulty | None:
    """
    Normalize a difficulty value.

    Args:
        value: A Difficulty, its string value, or None

    Returns:
        The matching Difficulty, or None for unrated recipes

    Raises:
        ValueError: If the value is not a known difficulty
    """
    if value is None or isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(value)
    except ValueError:
        valid = [d.value for d in Difficulty]
        raise ValueError(f"Unknown difficulty {value!r}, must be one of {valid}.") from None


def validate_elements(elements: Sequence[Element]) -> tuple[Element, ...]:
    """
    Validate the element catalog.

    Args:
        elements: Element definitions

    Returns:
        Validated elements as a tuple

    Raises:
        ValueError: If the catalog is empty, an id is blank, or an id repeats
    """
    if not elements:
        raise ValueError("Element catalog cannot be empty.")

    seen: set[str] = set()
    for i, element in enumerate(elements):
        if not isinstance(element.id, str) or not element.id:
            raise ValueError(f"Element at index {i} has an empty id.")
        if element.id in seen:
            raise ValueError(f"Duplicate element id {element.id!r} at index {i}.")
        seen.add(element.id)

    return tuple(elements)


def validate_combination(combination: Combination, index: int) -> Combination:
    """
    Validate a single recipe's shape.

    Raises:
        ValueError: If the recipe does not have exactly two non-empty inputs
            and a non-empty result
    """
    inputs = combination.elements
    if len(inputs) != 2 or not all(isinstance(i, str) and i for i in inputs):
        raise ValueError(f"Recipe at index {index} must have exactly two element ids, got {inputs!r}.")
    if not combination.result:
        raise ValueError(f"Recipe at index {index} has an empty result.")
    validate_difficulty(combination.difficulty)
    return combination


def find_catalog_anomalies(
    elements: Sequence[Element],
    combinations: Sequence[Combination],
) -> list[str]:
    """
    List tolerated authoring problems in the recipe catalog.

    Args:
        elements: Element definitions
        combinations: Recipes in catalog order

    Returns:
        Human-readable descriptions, in catalog order
    """
    known = {e.id for e in elements}
    first_by_pair: dict[tuple[str, str], Combination] = {}
    anomalies: list[str] = []

    for i, combo in enumerate(combinations):
        missing = [eid for eid in (*combo.elements, combo.result) if eid not in known]
        if missing:
            anomalies.append(
                f"Recipe {i} ({' + '.join(combo.elements)} -> {combo.result}) "
                f"references unknown element(s): {', '.join(missing)}"
            )

        first = first_by_pair.get(combo.key)
        if first is None:
            first_by_pair[combo.key] = combo
        else:
            anomalies.append(
                f"Recipe {i} ({' + '.join(combo.elements)} -> {combo.result}) "
                f"is shadowed by an earlier recipe producing {first.result}"
            )

    return anomalies
