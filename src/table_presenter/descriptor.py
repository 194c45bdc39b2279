"""Field descriptor JSON consumed by the web UI."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .context import TranslateFunc, translate
from .enums import ButtonAction, FieldFooter, StructuralType
from .fields import ButtonDef, Field, IconDef, MenuItemDef


def describe_field(
    field: Field,
    translator: Optional[TranslateFunc] = None,
    hidden: Optional[bool] = None,
) -> Dict[str, Any]:
    """Convert a field into its UI descriptor.

    Optional attributes are only present when set. ``search`` and ``sort``
    appear only when false, ``sticky`` and ``hide`` only when true.

    Args:
        field: Field to describe.
        translator: Label translation function.
        hidden: Current visibility, defaults to the field's own flag.

    Returns:
        Descriptor dictionary ready for JSON encoding.
    """
    is_hidden = field.hide if hidden is None else hidden
    descriptor: Dict[str, Any] = {
        "id": field.id,
        "name": translate(translator, field.name),
        "format": field.structural_type.value,
    }

    optional = (
        ("width", field.width),
        ("minWidth", field.min_width),
        ("hint", field.hint),
        ("display", field.display),
        ("align", field.align.value if field.align is not None else None),
        ("header", field.header),
        ("headerSpan", field.header_span),
    )
    for key, value in optional:
        if value is not None:
            descriptor[key] = value

    if not field.search:
        descriptor["search"] = False
    if not field.sort:
        descriptor["sort"] = False
    if field.sticky:
        descriptor["sticky"] = True
    if is_hidden:
        descriptor["hide"] = True
    if field.footer != FieldFooter.NO:
        descriptor["footer"] = field.footer.value

    if field.access:
        descriptor["access"] = list(field.access)

    if field.text_prefix is not None:
        descriptor["textPrefix"] = field.text_prefix
    if field.text_suffix is not None:
        descriptor["textSuffix"] = field.text_suffix

    if field.structural_type == StructuralType.BUTTONS:
        descriptor["buttons"] = _describe_buttons(field.buttons, field.menu_items, translator)
    elif field.structural_type == StructuralType.ICON:
        descriptor["icons"] = {
            value: _icon_map(icon, translator) for value, icon in field.icons.items()
        }
    elif field.structural_type == StructuralType.INPUT:
        descriptor["inputType"] = field.input_type
        descriptor["inputRequired"] = field.input_required
        descriptor["inputLang"] = field.input_lang
        descriptor["inputPaste"] = field.input_paste
        descriptor["search"] = False
        descriptor["sort"] = False

    return descriptor


def _icon_map(
    icon: Union[IconDef, ButtonDef], translator: Optional[TranslateFunc]
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "icon": icon.icon,
        "color": icon.color.value,
        "hint": translate(translator, icon.hint),
    }
    data.update(icon.options)
    return data


def _describe_buttons(
    buttons: Mapping[int, ButtonDef],
    menu_items: Mapping[int, Tuple[MenuItemDef, ...]],
    translator: Optional[TranslateFunc],
) -> List[Optional[Dict[str, Any]]]:
    """Lay buttons out in a list indexed by slot; unused slots are None."""
    if not buttons:
        return []
    slots: List[Optional[Dict[str, Any]]] = [None] * (max(buttons) + 1)
    for key, button in buttons.items():
        if key < 0:
            continue
        data = _icon_map(button, translator)
        data["action"] = button.action.value
        items = menu_items.get(key) or ()
        if button.action == ButtonAction.MENU and items:
            data["menuItems"] = [_menu_item(item, translator) for item in items]
        slots[key] = data
    return slots


def _menu_item(item: MenuItemDef, translator: Optional[TranslateFunc]) -> Dict[str, Any]:
    return {
        "action": item.action.value,
        "icon": item.icon,
        "color": item.color.value,
        "text": translate(translator, item.text),
    }


__all__ = ["describe_field"]
