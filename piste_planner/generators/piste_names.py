"""Piste names - Deterministic French piste names for generated levels.

Names follow three Savoyard patterns, themed by rank (gentle meadows for
green, gorges and abysses for black):
- 40% genitive:          "Le Col de l'Aigle"
- 30% postposed adjective: "La Combe Cachée"
- 30% preposed adjective:  "Le Bel Alpage"

Nouns carry their gender (M, F, MP, FP) for article and adjective agreement.
Park levels draw from a fixed list of park names.
"""

import re
from dataclasses import dataclass

from piste_planner.constants import NameConfig
from piste_planner.core.seeded_rng import SeededRNG
from piste_planner.model.level import Rank


@dataclass(frozen=True)
class PisteNoun:
    article: str
    noun: str
    gender: str  # "M", "F", "MP" or "FP"


def _adj(m: str, f: str, mp: str, fp: str, mv: str | None = None) -> dict[str, str]:
    forms = {"M": m, "F": f, "MP": mp, "FP": fp}
    if mv:
        forms["MV"] = mv
    return forms


NOUNS = {
    Rank.GREEN: [
        PisteNoun("Le", "Pré", "M"),
        PisteNoun("Le", "Chalet", "M"),
        PisteNoun("Le", "Bois", "M"),
        PisteNoun("Le", "Praz", "M"),
        PisteNoun("Le", "Sentier", "M"),
        PisteNoun("L'", "Alpage", "M"),
        PisteNoun("La", "Clairière", "F"),
        PisteNoun("La", "Forêt", "F"),
        PisteNoun("La", "Chapelle", "F"),
        PisteNoun("La", "Prairie", "F"),
        PisteNoun("Les", "Sapins", "MP"),
    ],
    Rank.BLUE: [
        PisteNoun("Le", "Lac", "M"),
        PisteNoun("Le", "Torrent", "M"),
        PisteNoun("Le", "Balcon", "M"),
        PisteNoun("Le", "Refuge", "M"),
        PisteNoun("Le", "Plateau", "M"),
        PisteNoun("Le", "Nant", "M"),
        PisteNoun("La", "Cascade", "F"),
        PisteNoun("La", "Combe", "F"),
        PisteNoun("La", "Vallée", "F"),
        PisteNoun("La", "Traversée", "F"),
        PisteNoun("Les", "Crêtes", "FP"),
    ],
    Rank.RED: [
        PisteNoun("Le", "Col", "M"),
        PisteNoun("Le", "Glacier", "M"),
        PisteNoun("Le", "Passage", "M"),
        PisteNoun("Le", "Rocher", "M"),
        PisteNoun("Le", "Mur", "M"),
        PisteNoun("La", "Crête", "F"),
        PisteNoun("La", "Corniche", "F"),
        PisteNoun("La", "Face", "F"),
        PisteNoun("La", "Balme", "F"),
        PisteNoun("L'", "Arête", "F"),
        PisteNoun("Les", "Rochers", "MP"),
    ],
    Rank.BLACK: [
        PisteNoun("Le", "Ravin", "M"),
        PisteNoun("Le", "Couloir", "M"),
        PisteNoun("Le", "Précipice", "M"),
        PisteNoun("Le", "Gouffre", "M"),
        PisteNoun("Le", "Chaos", "M"),
        PisteNoun("L'", "Aiguille", "F"),
        PisteNoun("L'", "Enfer", "M"),
        PisteNoun("La", "Brèche", "F"),
        PisteNoun("La", "Crevasse", "F"),
        PisteNoun("La", "Faille", "F"),
    ],
}

# Postposed adjectives: "Le Col Gelé"
ADJECTIVES = {
    Rank.GREEN: [
        _adj("Fleuri", "Fleurie", "Fleuris", "Fleuries"),
        _adj("Ensoleillé", "Ensoleillée", "Ensoleillés", "Ensoleillées"),
        _adj("Tranquille", "Tranquille", "Tranquilles", "Tranquilles"),
        _adj("Doux", "Douce", "Doux", "Douces"),
        _adj("Paisible", "Paisible", "Paisibles", "Paisibles"),
        _adj("Boisé", "Boisée", "Boisés", "Boisées"),
    ],
    Rank.BLUE: [
        _adj("Blanc", "Blanche", "Blancs", "Blanches"),
        _adj("Enneigé", "Enneigée", "Enneigés", "Enneigées"),
        _adj("Caché", "Cachée", "Cachés", "Cachées"),
        _adj("Sauvage", "Sauvage", "Sauvages", "Sauvages"),
        _adj("Secret", "Secrète", "Secrets", "Secrètes"),
        _adj("Suspendu", "Suspendue", "Suspendus", "Suspendues"),
    ],
    Rank.RED: [
        _adj("Haut", "Haute", "Hauts", "Hautes"),
        _adj("Perdu", "Perdue", "Perdus", "Perdues"),
        _adj("Escarpé", "Escarpée", "Escarpés", "Escarpées"),
        _adj("Gelé", "Gelée", "Gelés", "Gelées"),
        _adj("Vertigineux", "Vertigineuse", "Vertigineux", "Vertigineuses"),
    ],
    Rank.BLACK: [
        _adj("Noir", "Noire", "Noirs", "Noires"),
        _adj("Maudit", "Maudite", "Maudits", "Maudites"),
        _adj("Infernal", "Infernale", "Infernaux", "Infernales"),
        _adj("Mortel", "Mortelle", "Mortels", "Mortelles"),
        _adj("Redoutable", "Redoutable", "Redoutables", "Redoutables"),
    ],
}

# Preposed adjectives: "Le Grand Col"; MV is the masculine form before a vowel
PREPOSED_ADJECTIVES = {
    Rank.GREEN: [
        _adj("Petit", "Petite", "Petits", "Petites"),
        _adj("Joli", "Jolie", "Jolis", "Jolies"),
        _adj("Beau", "Belle", "Beaux", "Belles", mv="Bel"),
        _adj("Vieux", "Vieille", "Vieux", "Vieilles", mv="Vieil"),
    ],
    Rank.BLUE: [
        _adj("Grand", "Grande", "Grands", "Grandes"),
        _adj("Haut", "Haute", "Hauts", "Hautes"),
        _adj("Beau", "Belle", "Beaux", "Belles", mv="Bel"),
    ],
    Rank.RED: [
        _adj("Grand", "Grande", "Grands", "Grandes"),
        _adj("Haut", "Haute", "Hauts", "Hautes"),
        _adj("Mauvais", "Mauvaise", "Mauvais", "Mauvaises"),
    ],
    Rank.BLACK: [
        _adj("Grand", "Grande", "Grands", "Grandes"),
        _adj("Vieux", "Vieille", "Vieux", "Vieilles", mv="Vieil"),
    ],
}

GENITIVES = {
    Rank.GREEN: ["des Marmottes", "du Berger", "du Mélèze", "du Hameau", "des Myrtilles", "des Arolles"],
    Rank.BLUE: ["des Chamois", "de la Vanoise", "du Beaufortain", "des Sources", "du Nant", "de la Moraine"],
    Rank.RED: [
        "de l'Aigle",
        "des Bouquetins",
        "des Aiguilles",
        "du Vent",
        "des Séracs",
        "du Diable",
        "de la Pointe",
    ],
    Rank.BLACK: [
        "du Loup",
        "de l'Ours",
        "des Abîmes",
        "du Néant",
        "des Damnés",
        "de la Mort",
        "du Purgatoire",
        "des Ombres",
    ],
}

GENITIVE_SHARE = 0.4
POSTPOSED_SHARE = 0.3

_STARTS_WITH_VOWEL = re.compile(r"^[AEÉIOUÂÊÎÔÛ]", re.IGNORECASE)


def is_redundant(noun: str, genitive: str) -> bool:
    """True if the genitive repeats the noun ("Le Nant du Nant")."""
    return noun.lower() in genitive.lower()


def generate_piste_name(rng: SeededRNG, rank: Rank, is_park: bool = False) -> str:
    """Draw a piste name from the RNG stream.

    Args:
        rng: Generator-owned RNG (consumes 1 to 3 draws)
        rank: Rank whose themed pools are used
        is_park: Use the park name list instead

    Returns:
        Display name such as "La Combe Cachée" or "Le Tremplin".
    """
    if is_park:
        return rng.pick(NameConfig.PARK_NAMES)

    n = rng.pick(NOUNS[rank])
    space = "" if n.article == "L'" else " "
    roll = rng.frac()

    if roll < GENITIVE_SHARE:
        genitives = GENITIVES[rank]
        genitive = rng.pick(genitives)
        if is_redundant(n.noun, genitive):
            genitive = next((g for g in genitives if not is_redundant(n.noun, g)), genitive)
        return f"{n.article}{space}{n.noun} {genitive}"

    if roll < GENITIVE_SHARE + POSTPOSED_SHARE:
        adjective = rng.pick(ADJECTIVES[rank])
        return f"{n.article}{space}{n.noun} {adjective[n.gender]}"

    pre = rng.pick(PREPOSED_ADJECTIVES[rank])
    if n.gender == "M" and _STARTS_WITH_VOWEL.match(n.noun) and "MV" in pre:
        form = pre["MV"]
    else:
        form = pre[n.gender]
    # "L'Alpage" -> "Le Bel Alpage": the adjective separates article and noun
    if n.article == "L'":
        article = "La" if n.gender in ("F", "FP") else "Le"
    else:
        article = n.article
    return f"{article} {form} {n.noun}"
