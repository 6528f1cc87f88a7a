from product_engine.commands.registry import (
    CommandDefinition,
    CommandRegistry,
    build_form_registry,
    to_jsonable,
)

__all__ = ["CommandDefinition", "CommandRegistry", "build_form_registry", "to_jsonable"]
