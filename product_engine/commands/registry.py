"""
Command Registry: Named Commands and Queries over a ProductForm

Gives any UI layer one small surface instead of the component objects:
- Each command is registered under "<component>.<operation>"
- Commands are flagged as mutating or read-only
- Arguments are validated and coerced against the handler annotations
  before the handler runs, so a wrong-typed value never reaches the state
- Results are converted to plain JSON-ready values
"""
from __future__ import annotations
from decimal import Decimal
from typing import Any, Callable, Optional
import inspect
import logging

from pydantic import BaseModel, validate_call

from product_engine.form.product_form import THRESHOLD_STORES, ProductForm

logger = logging.getLogger(__name__)


class CommandDefinition(BaseModel):
    """Registered command metadata."""
    name: str
    description: str
    component: str
    mutating: bool = True


class CommandRegistry:
    """Central registry of form commands."""

    def __init__(self):
        self._commands: dict[str, CommandDefinition] = {}
        self._handlers: dict[str, Callable] = {}
        self._validated: dict[str, Callable] = {}

    def register(
        self,
        name: str,
        description: str,
        component: str,
        handler: Callable,
        mutating: bool = True,
    ):
        """Register a command."""
        self._commands[name] = CommandDefinition(
            name=name,
            description=description,
            component=component,
            mutating=mutating,
        )
        self._handlers[name] = handler
        self._validated[name] = validate_call(handler)

    def deregister(self, name: str):
        """Remove a command."""
        self._commands.pop(name, None)
        self._handlers.pop(name, None)
        self._validated.pop(name, None)

    def list_commands(self, component: Optional[str] = None) -> list[CommandDefinition]:
        """List commands, optionally only those of one component."""
        commands = list(self._commands.values())
        if component:
            commands = [c for c in commands if c.component == component]
        return commands

    def get_command(self, name: str) -> Optional[CommandDefinition]:
        """Get command metadata."""
        return self._commands.get(name)

    def invoke(self, name: str, **kwargs) -> Any:
        """Run a command and return its JSON-ready result."""
        handler = self._handlers.get(name)
        if not handler:
            raise ValueError(f"Command not found: {name}")
        try:
            inspect.signature(handler).bind(**kwargs)
        except TypeError as e:
            raise ValueError(f"Bad arguments for {name}: {e}") from e
        result = self._validated[name](**kwargs)
        logger.debug(f"Invoked {name} with {sorted(kwargs)}")
        return to_jsonable(result)

    @property
    def command_count(self) -> int:
        return len(self._commands)


def to_jsonable(value: Any) -> Any:
    """Convert engine results (models, Decimals, lists) to plain values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value


# ---------------------------------------------------------------------------
# Form wiring
# ---------------------------------------------------------------------------

def build_form_registry(form: ProductForm) -> CommandRegistry:
    """Register every command and query of ``form``."""
    registry = CommandRegistry()
    reg = registry.register

    # Form
    reg("form.update_detail", "Set one product field", "form", form.update_detail)
    reg("form.snapshot", "Read the whole state tree", "form", form.snapshot, mutating=False)

    # Attributes & variants
    attrs = form.attributes
    reg("attributes.add_row", "Add an attribute row", "attributes", form.add_attribute_row)
    reg("attributes.set_attribute_key", "Choose the row's attribute", "attributes", attrs.set_attribute_key)
    reg("attributes.set_values", "Replace the row's values", "attributes", attrs.set_values)
    reg("attributes.toggle_value", "Add or remove one value", "attributes", attrs.toggle_value)
    reg("attributes.set_apply", "Set the row's apply flag", "attributes", attrs.set_apply)
    reg("attributes.remove_row", "Remove an attribute row", "attributes", attrs.remove_row)
    reg("attributes.toggle_variant_apply", "Flip one variant's apply flag", "attributes", attrs.toggle_variant_apply)
    reg("attributes.remove_variant", "Drop one generated variant", "attributes", attrs.remove_variant)
    reg("attributes.get_derived_variants", "Read generated variants", "attributes",
        attrs.get_derived_variants, mutating=False)

    # Threshold stores
    for store_name in THRESHOLD_STORES:
        store = form.threshold_store(store_name)
        reg(f"{store_name}.set_scope_mode", "Switch global/per-scope", store_name, store.set_scope_mode)
        reg(f"{store_name}.set_active_scope", "Select the active scope key", store_name, store.set_active_scope)
        reg(f"{store_name}.add_row", "Append the next level", store_name, store.add_row)
        reg(f"{store_name}.update_row", "Edit one level field", store_name, store.update_row)
        reg(f"{store_name}.remove_row", "Remove a level and renumber", store_name, store.remove_row)
        reg(f"{store_name}.get_active_threshold_list", "Read the active levels", store_name,
            store.get_active_threshold_list, mutating=False)

    # Units
    units = form.units
    reg("units.add_unit", "Add a unit row", "units", units.add_unit)
    reg("units.remove_unit", "Remove a unit row", "units", units.remove_unit)
    reg("units.set_field", "Set one unit field", "units", units.set_field)
    reg("units.set_default_sales", "Mark the default sales unit", "units", units.set_default_sales)
    reg("units.set_default_purchase", "Mark the default purchase unit", "units", units.set_default_purchase)
    reg("units.set_price", "Set one price cell", "units", units.set_price)

    # Compo
    compo = form.compo
    reg("compo.add_item", "Add a component row", "compo", compo.add_item)
    reg("compo.update_item", "Edit a component row", "compo", compo.update_item)
    reg("compo.remove_item", "Remove a component row", "compo", compo.remove_item)
    reg("compo.total_cost", "Total component cost", "compo", compo.total_cost, mutating=False)

    # Photos
    photos = form.photos
    reg("photos.add_photo", "Add a photo", "photos", photos.add_photo)
    reg("photos.set_image", "Attach an image to a photo row", "photos", photos.set_image)
    reg("photos.set_caption", "Set a photo caption", "photos", photos.set_caption)
    reg("photos.remove_photo", "Remove a photo", "photos", photos.remove_photo)
    reg("photos.make_primary", "Move a photo to the front", "photos", photos.make_primary)

    # Barcodes & attachments
    reg("barcodes.add", "Add a barcode entry", "barcodes", form.barcodes.add)
    reg("barcodes.update", "Edit a barcode entry", "barcodes", form.barcodes.update)
    reg("barcodes.remove", "Remove a barcode entry", "barcodes", form.barcodes.remove)
    reg("attachments.add", "Add an attachment", "attachments", form.attachments.add)
    reg("attachments.remove", "Remove an attachment", "attachments", form.attachments.remove)

    return registry
