"""
Element Alchemy - Element & Combination Catalog

Static element definitions and pairwise recipes, loaded and validated once at
import. The catalog is read-only; per-game discovered flags live on the
Element values held by each GameState.

Lookups:
    - find_combination(a, b): unordered pair lookup, first recipe in
      catalog order wins when a pair is listed twice
    - element_by_id(state, id): returns None instead of raising
"""

from __future__ import annotations

import logging
from typing import Sequence

from src.engine.base import Category, Combination, Element, GameState, Rarity
from src.engine.validators import (
    find_catalog_anomalies,
    validate_combination,
    validate_difficulty,
    validate_elements,
)

logger = logging.getLogger(__name__)


def _element(
    id: str,
    name: str,
    symbol: str,
    color: str,
    category: str,
    rarity: str,
    description: str,
    discovered: bool = False,
    atomic_number: int | None = None,
) -> Element:
    return Element(
        id=id,
        name=name,
        symbol=symbol,
        color=color,
        category=Category(category),
        discovered=discovered,
        description=description,
        atomic_number=atomic_number,
        rarity=Rarity(rarity),
    )


def _recipe(a: str, b: str, result: str, description: str, difficulty: str | None) -> Combination:
    return Combination(
        elements=(a, b),
        result=result,
        description=description,
        difficulty=validate_difficulty(difficulty),
    )


ELEMENTS: tuple[Element, ...] = validate_elements([
    # Basic elements, available at start
    _element("air", "Air", "💨", "#A6E1FA", "basic", "common", "The atmosphere around us", discovered=True),
    _element("water", "Water", "💧", "#0CA5E9", "basic", "common", "The essence of life, H₂O", discovered=True),
    _element("fire", "Fire", "🔥", "#F97316", "basic", "common", "Heat and flame", discovered=True),
    _element("earth", "Earth", "🌍", "#A16207", "basic", "common", "Solid ground and soil", discovered=True),

    # Compounds
    _element("steam", "Steam", "♨️", "#94A3B8", "compound", "common", "Water in gaseous form"),
    _element("lava", "Lava", "🌋", "#EF4444", "compound", "uncommon", "Molten rock from Earth's core"),
    _element("mud", "Mud", "💩", "#78350F", "compound", "common", "A mixture of earth and water"),
    _element("energy", "Energy", "⚡", "#8B5CF6", "compound", "uncommon", "The power to do work"),
    _element("smoke", "Smoke", "🌫️", "#64748B", "compound", "common", "Airborne particles from combustion"),
    _element("dust", "Dust", "🌫️", "#D1D5DB", "compound", "common", "Tiny particles of solid matter"),
    _element("metal", "Metal", "⚙️", "#71717A", "compound", "uncommon", "Strong, conductive material"),
    _element("wood", "Wood", "🌲", "#84CC16", "compound", "common", "Material from trees"),
    _element("stone", "Stone", "🪨", "#6B7280", "compound", "common", "Hard mineral matter"),
    _element("salt", "Salt", "🧂", "#E2E8F0", "compound", "common", "Crystal mineral, NaCl"),
    _element("alcohol", "Alcohol", "🍸", "#CBD5E1", "compound", "uncommon", "Organic compound with OH group"),

    # Advanced
    _element("life", "Life", "🌱", "#10B981", "advanced", "rare", "Animated, self-sustaining existence"),
    _element("bacteria", "Bacteria", "🦠", "#14B8A6", "advanced", "uncommon", "Microscopic single-celled organisms"),
    _element("plant", "Plant", "🌿", "#22C55E", "advanced", "uncommon", "Photosynthesizing organism"),
    _element("human", "Human", "👤", "#EC4899", "advanced", "rare", "Homo sapiens, advanced life form"),
    _element("time", "Time", "⏳", "#8B5CF6", "advanced", "legendary", "The fourth dimension, ever-flowing"),

    # Scientific (periodic table)
    _element("hydrogen", "Hydrogen", "H", "#22D3EE", "scientific", "uncommon",
             "Lightest element, makes stars shine", atomic_number=1),
    _element("helium", "Helium", "He", "#FB923C", "scientific", "uncommon",
             "Noble gas, makes balloons float", atomic_number=2),
    _element("carbon", "Carbon", "C", "#4B5563", "scientific", "uncommon",
             "Foundation of organic chemistry", atomic_number=6),
    _element("oxygen", "Oxygen", "O", "#60A5FA", "scientific", "uncommon",
             "Essential for breathing", atomic_number=8),
    _element("gold", "Gold", "Au", "#F59E0B", "scientific", "rare",
             "Precious metal, never tarnishes", atomic_number=79),

    # Materials and technology
    _element("plastic", "Plastic", "🧪", "#9CA3AF", "advanced", "uncommon", "Synthetic polymer material"),
    _element("glass", "Glass", "🪟", "#A1A1AA", "compound", "common", "Transparent solid material"),
    _element("electricity", "Electricity", "⚡", "#FACC15", "advanced", "rare", "Flow of electric charge"),
    _element("computer", "Computer", "💻", "#3B82F6", "advanced", "rare", "Processing machine"),
    _element("internet", "Internet", "🌐", "#2563EB", "advanced", "legendary", "Global information network"),

    # Mythical and conceptual
    _element("magic", "Magic", "✨", "#C084FC", "rare", "legendary", "Mystical supernatural energy"),
    _element("dragon", "Dragon", "🐉", "#EF4444", "rare", "legendary", "Mythical fire-breathing creature"),
    _element("love", "Love", "❤️", "#FB7185", "rare", "rare", "Deep affection and attachment"),
    _element("knowledge", "Knowledge", "📚", "#A78BFA", "rare", "rare", "Information and understanding"),
    _element("universe", "Universe", "🌌", "#2DD4BF", "rare", "legendary", "All of space, time, matter and energy"),
])


_RECIPE_DATA: list[tuple[str, str, str, str, str | None]] = [
    # Level 1
    ("water", "fire", "steam", "Water evaporates when heated by fire", "easy"),
    ("earth", "fire", "lava", "Earth melts under extreme heat", "easy"),
    ("earth", "water", "mud", "Earth becomes mud when mixed with water", "easy"),
    ("fire", "air", "energy", "Fire fed by air creates energy", "easy"),
    ("fire", "earth", "smoke", "Burning matter produces smoke", "easy"),
    ("air", "earth", "dust", "Air carrying tiny earth particles", "easy"),

    # Level 2
    ("fire", "stone", "metal", "Stone refined by fire yields metal", "medium"),
    ("earth", "life", "wood", "Life growing from earth forms wood", "medium"),
    ("earth", "energy", "stone", "Earth compressed by energy creates stone", "medium"),
    ("water", "energy", "salt", "Water evaporated by energy leaves salt", "medium"),
    ("water", "plant", "alcohol", "Plant matter fermented in water", "medium"),

    # Advanced
    ("energy", "water", "life", "Energy animates water into the first life", "hard"),
    ("life", "water", "bacteria", "Simple life forms in water", "hard"),
    ("life", "earth", "plant", "Life taking root in earth", "hard"),
    ("life", "energy", "human", "Advanced life form with consciousness", "hard"),
    ("energy", "energy", "time", "Energy concentrated creates the fabric of time", "hard"),

    # Alternative paths
    ("steam", "earth", "mud", "Steam condensing onto earth", "medium"),
    ("lava", "water", "stone", "Lava cooled by water hardens into stone", "medium"),
    ("life", "mud", "bacteria", "Life emerging from primordial mud", "medium"),

    # Scientific
    ("energy", "air", "hydrogen", "Energy splits air to release hydrogen", "hard"),
    ("energy", "hydrogen", "helium", "Hydrogen fusion creates helium", "hard"),
    ("hydrogen", "oxygen", "water", "H₂O is the chemical formula for water", "medium"),

    # Materials
    ("stone", "fire", "glass", "Silica from stone melted by fire forms glass", "medium"),
    ("oil", "energy", "plastic", "Oil refined with energy creates plastic", "hard"),
    ("metal", "energy", "electricity", "Energy flowing through metal creates electricity", "hard"),
    ("electricity", "metal", "computer", "Electricity controlling metal circuits", "very-hard"),
    ("computer", "computer", "internet", "Networked computers share information", "very-hard"),

    # Mythical
    ("fire", "knowledge", "dragon", "Knowledge of fire manifests as a dragon", "very-hard"),
    ("energy", "knowledge", "magic", "Knowledge directing energy creates magic", "very-hard"),
    ("human", "human", "love", "The connection between humans", "very-hard"),
    ("time", "space", "universe", "Time and space form the fabric of the universe", "very-hard"),

    # Chemistry
    ("fire", "wood", "ash", "Wood burned by fire leaves ash", "easy"),
    ("water", "electricity", "hydrogen", "Electrolysis splits water into hydrogen", "medium"),
    ("air", "electricity", "ozone", "Electricity through air forms ozone", "medium"),
    ("carbon", "oxygen", "carbon dioxide", "Carbon combines with oxygen", "medium"),
    ("hydrogen", "carbon", "methane", "Hydrogen and carbon form methane", "medium"),
    ("carbon", "carbon", "diamond", "Carbon under pressure becomes diamond", "hard"),
    ("lava", "pressure", "diamond", "Alternative way to create diamond", "hard"),
    ("carbon", "energy", "coal", "Carbon compressed by energy", "medium"),
    ("coal", "pressure", "diamond", "Yet another way to create diamond", "hard"),

    # Light and optics
    ("energy", "glass", "light", "Energy passing through glass creates light", "medium"),
    ("light", "water", "rainbow", "Light refracted through water droplets", "medium"),
    ("light", "darkness", "shadow", "Light blocked creates shadow", "easy"),

    # Weather
    ("water", "air", "cloud", "Water vapor suspended in air", "easy"),
    ("cloud", "electricity", "lightning", "Electric discharge from clouds", "medium"),
    ("cloud", "cold", "snow", "Frozen water crystals from clouds", "medium"),
    ("lightning", "sand", "glass", "Lightning striking sand creates glass", "hard"),

    # Space
    ("fire", "hydrogen", "star", "Burning hydrogen creates stars", "hard"),
    ("star", "time", "supernova", "Star reaching the end of its life", "very-hard"),
    ("star", "space", "solar system", "Star with orbiting objects", "very-hard"),
    ("earth", "space", "planet", "Earth is a type of planet", "hard"),

    # Technology
    ("computer", "knowledge", "artificial intelligence", "Computer that can learn", "very-hard"),
    ("metal", "electricity", "robot", "Metal animated by electricity", "hard"),
    ("robot", "artificial intelligence", "android", "Robot with human-like intelligence", "very-hard"),

    # Abstract
    ("human", "knowledge", "philosophy", "Human pursuit of knowledge", "hard"),
    ("love", "time", "eternity", "Love that lasts forever", "very-hard"),
    ("magic", "science", "alchemy", "The mystical precursor to chemistry", "very-hard"),
]

COMBINATIONS: tuple[Combination, ...] = tuple(
    validate_combination(_recipe(*row), i) for i, row in enumerate(_RECIPE_DATA)
)


def _build_index(combinations: Sequence[Combination]) -> dict[tuple[str, str], Combination]:
    """Map each sorted pair to its first recipe in catalog order."""
    index: dict[tuple[str, str], Combination] = {}
    for combo in combinations:
        index.setdefault(combo.key, combo)
    return index


_RECIPE_INDEX = _build_index(COMBINATIONS)

CATALOG_ANOMALIES: tuple[str, ...] = tuple(find_catalog_anomalies(ELEMENTS, COMBINATIONS))
for _anomaly in CATALOG_ANOMALIES:
    logger.debug("Catalog anomaly: %s", _anomaly)


def find_combination(id_a: str, id_b: str) -> Combination | None:
    """
    Look up the recipe for an unordered pair of element ids.

    Args:
        id_a: First element id
        id_b: Second element id

    Returns:
        The canonical recipe, or None if the pair does not react
    """
    if not id_a or not id_b:
        return None
    key = (id_a, id_b) if id_a <= id_b else (id_b, id_a)
    return _RECIPE_INDEX.get(key)


def effective_combinations() -> tuple[Combination, ...]:
    """Recipes that find_combination can return, in catalog order."""
    return tuple(_RECIPE_INDEX.values())


def element_by_id(state: GameState | None, element_id: str | None) -> Element | None:
    """Find an element in a game state. Returns None for missing state or id."""
    if state is None or not state.elements or element_id is None:
        return None
    for element in state.elements:
        if element.id == element_id:
            return element
    return None


def catalog_element(element_id: str) -> Element | None:
    """Find an element definition in the static catalog."""
    for element in ELEMENTS:
        if element.id == element_id:
            return element
    return None


def initial_elements() -> tuple[Element, ...]:
    """Elements for a fresh game: basic elements discovered, the rest hidden."""
    return ELEMENTS


def elements_by_category(elements: Sequence[Element], category: Category) -> list[Element]:
    return [e for e in elements if e.category == category]


def elements_by_rarity(elements: Sequence[Element], rarity: Rarity) -> list[Element]:
    return [e for e in elements if e.rarity == rarity]


def all_categories() -> list[Category]:
    return list(Category)


def all_rarities() -> list[Rarity]:
    return list(Rarity)
