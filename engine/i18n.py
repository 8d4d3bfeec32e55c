"""Message catalogue for user-facing text."""

from config import LOCALE

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "Courage": "Courage",
        "SelfControl": "Self-Control",
        "Wisdom": "Wisdom",
        "Sharpness": "Sharpness",
        "NewItem": "New Item",
        "Normal": "Normal",
        "WithAdvantage": "with Advantage",
        "WithDisadvantage": "with Disadvantage",
        "RollOf": "Roll of",
        "CurseRoll": "Curse Roll",
        "Attribute": "Attribute",
        "EncumbrancePenalty": "Encumbrance Penalty",
        "Equipment": "Equipment",
        "TotalResult": "Total",
        "Success": "Success",
        "BadOmen": "Bad Omen",
        "Failure": "Failure",
        "CurseHasFallen": "The curse has fallen!",
        "AttributeCapWarning": "{attribute} cannot exceed 5.",
        "AttributeFloorWarning": "{attribute} cannot be negative.",
        "AttributeTierWarning": "{attribute} cannot exceed {cap} while another attribute holds a higher tier.",
        "MaxHealthCapWarning": "Maximum health cannot exceed 15.",
        "HealthCapWarning": "Health cannot exceed maximum health.",
        "HealthFloorWarning": "Health cannot be negative.",
        "NoCurseResistanceLeft": "No curse resistance left: the roll is made with disadvantage.",
        "ErrorAttributeNotFound": "Attribute {attribute} not found.",
        "ItemNotFound": "Item not found.",
        "ItemDeleted": "{item} deleted.",
        "ActorNotFound": "Actor not found.",
        "NpcHasNoAttributes": "NPC/Yokai actors have no attributes.",
    },
    "es": {
        "Courage": "Coraje",
        "SelfControl": "Autocontrol",
        "Wisdom": "Sabiduría",
        "Sharpness": "Agudeza",
        "NewItem": "Nuevo objeto",
        "Normal": "Normal",
        "WithAdvantage": "con ventaja",
        "WithDisadvantage": "con desventaja",
        "RollOf": "Tirada de",
        "CurseRoll": "Tirada de maldición",
        "Attribute": "Atributo",
        "EncumbrancePenalty": "Penalización por carga",
        "Equipment": "Equipo",
        "TotalResult": "Total",
        "Success": "Éxito",
        "BadOmen": "Mal augurio",
        "Failure": "Fallo",
        "CurseHasFallen": "¡La maldición ha caído!",
        "AttributeCapWarning": "{attribute} no puede superar 5.",
        "AttributeFloorWarning": "{attribute} no puede ser negativo.",
        "AttributeTierWarning": "{attribute} no puede superar {cap} mientras otro atributo ocupe un nivel superior.",
        "MaxHealthCapWarning": "La salud máxima no puede superar 15.",
        "HealthCapWarning": "La salud no puede superar la salud máxima.",
        "HealthFloorWarning": "La salud no puede ser negativa.",
        "NoCurseResistanceLeft": "Sin resistencia a la maldición: la tirada se hace con desventaja.",
        "ErrorAttributeNotFound": "No se encontró el atributo {attribute}.",
        "ItemNotFound": "Objeto no encontrado.",
        "ItemDeleted": "{item} eliminado.",
        "ActorNotFound": "Actor no encontrado.",
        "NpcHasNoAttributes": "Los PNJ/Yokai no tienen atributos.",
    },
}


def localize(key: str, locale: str | None = None, **params: object) -> str:
    """Look up a message and fill in its ``{placeholders}``.

    Unknown keys come back unchanged, so a missing translation shows the key
    rather than failing the request.
    """
    catalogue = MESSAGES.get(locale or LOCALE, MESSAGES["en"])
    template = catalogue.get(key, MESSAGES["en"].get(key, key))
    return template.format(**params) if params else template


def attribute_label(attribute: str, locale: str | None = None) -> str:
    """Localized display name for an attribute key like 'self_control'."""
    key = "".join(part.capitalize() for part in attribute.split("_"))
    return localize(key, locale)
