"""
Source templates for generated attribute observers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..hooks import LifecycleEvent
from ..observers.parser import observer_method_name
from ..utils import camel_to_snake, studly


MODULE_TEMPLATE = '''"""
Attribute observer for {subject}.
"""
{imports}

class {class_name}:
{body}
'''

METHOD_TEMPLATE = '''    def {method_name}(self, model{annotation}, new_value, old_value):
        """Called during '{event}' when '{attribute}' changed."""
        pass
'''


@dataclass
class ObserverStub:
    class_name: str
    model: Optional[str] = None
    attributes: Sequence[str] = field(default_factory=lambda: ("attribute",))
    events: Sequence[str] = field(default_factory=lambda: ("updated",))

    def __post_init__(self) -> None:
        self.class_name = studly(self.class_name)
        if not self.class_name.isidentifier():
            raise ValueError(f"'{self.class_name}' is not a valid class name")
        self.events = [LifecycleEvent.coerce(event).value for event in self.events]
        self.attributes = [camel_to_snake(attribute) for attribute in self.attributes]

    @property
    def module_name(self) -> str:
        return camel_to_snake(self.class_name)

    @property
    def model_name(self) -> Optional[str]:
        if not self.model:
            return None
        return self.model.replace(":", ".").rsplit(".", 1)[-1]

    def method_names(self) -> List[str]:
        return [
            observer_method_name(attribute, event)
            for attribute in self.attributes
            for event in self.events
        ]

    def render(self) -> str:
        imports = ""
        annotation = ""
        if self.model:
            module_path, _, name = self.model.replace(":", ".").rpartition(".")
            if module_path:
                imports = f"\nfrom {module_path} import {name}\n"
            annotation = f": {name}"

        methods = [
            METHOD_TEMPLATE.format(
                method_name=observer_method_name(attribute, event),
                annotation=annotation,
                event=event,
                attribute=attribute,
            )
            for attribute in self.attributes
            for event in self.events
        ]
        return MODULE_TEMPLATE.format(
            subject=self.model_name or "a model",
            imports=imports,
            class_name=self.class_name,
            body="\n".join(methods) if methods else "    pass\n",
        )
