from typing import Any, Dict, Optional


class Environment:
    """Represents a scope environment mapping identifiers to values.

    Function values keep a reference to the environment they were created
    in, so an environment lives as long as any closure that captured it.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def enclosed(self) -> 'Environment':
        return Environment(parent=self)

    def define(self, name: str, value: Any) -> Any:
        # Always binds locally, shadowing any outer binding of the same name
        self.values[name] = value
        return value

    def resolve(self, name: str) -> Optional[Any]:
        """Look a name up along the parent chain.

        Returns None when no environment in the chain binds the name. The
        language's null value is `types.NULL`, never None, so the two
        cannot be confused.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        return None

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None

    def __repr__(self) -> str:
        names = ', '.join(sorted(self.values))
        return f"<Environment [{names}]{' enclosed' if self.parent else ''}>"
