from typing import Dict, Optional
from iam.types import Value


class Environment:
    """Maps identifiers to values for one program run.

    There is a single flat namespace: no scopes, no constants, no removal.
    Writing an existing name replaces its value.
    """
    def __init__(self):
        self.values: Dict[str, Value] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def get(self, name: str) -> Optional[Value]:
        return self.values.get(name)

    def set(self, name: str, value: Value):
        self.values[name] = value
