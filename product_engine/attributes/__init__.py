from product_engine.attributes.attribute_set import AttributeSet
from product_engine.attributes.combinations import group_attributes, regenerate

__all__ = ["AttributeSet", "group_attributes", "regenerate"]
