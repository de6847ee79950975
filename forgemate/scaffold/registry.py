"""
Stub registry for scaffold generation.

Maps stub names to the location of the file each stub produces in a
Laravel project, and to the generation option that turns it on or off.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


BACKEND = "backend"
FRONTEND = "frontend"


@dataclass(frozen=True)
class StubTarget:
    """Where a stub is rendered to and which option controls it."""

    stub: str
    path_pattern: str  # may contain {{...}} naming tokens and {{timestamp}}
    option: str
    layer: str = BACKEND


DEFAULT_TARGETS = (
    StubTarget("backend/model", "app/Models/{{modelName}}.php", "generate_model"),
    StubTarget(
        "backend/migration",
        "database/migrations/{{timestamp}}_create_{{tableName}}_table.php",
        "generate_migration",
    ),
    StubTarget(
        "backend/repository.interface",
        "app/Support/Interfaces/Repositories/{{modelName}}RepositoryInterface.php",
        "generate_repository",
    ),
    StubTarget(
        "backend/repository",
        "app/Repositories/{{modelName}}Repository.php",
        "generate_repository",
    ),
    StubTarget(
        "backend/service.interface",
        "app/Support/Interfaces/Services/{{modelName}}ServiceInterface.php",
        "generate_service",
    ),
    StubTarget(
        "backend/service", "app/Services/{{modelName}}Service.php", "generate_service"
    ),
    StubTarget(
        "backend/controller",
        "app/Http/Controllers/{{modelName}}Controller.php",
        "generate_controller",
    ),
    StubTarget(
        "backend/controller.api",
        "app/Http/Controllers/Api/{{modelName}}Controller.php",
        "generate_api_controller",
    ),
    StubTarget(
        "backend/store.request",
        "app/Http/Requests/{{modelName}}/Store{{modelName}}Request.php",
        "generate_requests",
    ),
    StubTarget(
        "backend/update.request",
        "app/Http/Requests/{{modelName}}/Update{{modelName}}Request.php",
        "generate_requests",
    ),
    StubTarget(
        "backend/resource",
        "app/Http/Resources/{{modelName}}Resource.php",
        "generate_resource",
    ),
    StubTarget(
        "backend/factory",
        "database/factories/{{modelName}}Factory.php",
        "generate_factory",
    ),
    StubTarget(
        "backend/seeder", "database/seeders/{{modelName}}Seeder.php", "generate_seeder"
    ),
    StubTarget(
        "frontend/model",
        "resources/js/Support/Interfaces/Models/{{modelName}}.ts",
        "generate_frontend",
        FRONTEND,
    ),
    StubTarget(
        "frontend/resource",
        "resources/js/Support/Interfaces/Resources/{{modelName}}Resource.ts",
        "generate_frontend",
        FRONTEND,
    ),
    StubTarget(
        "frontend/service.hook",
        "resources/js/Services/{{modelCamelCase}}ServiceHook.ts",
        "generate_frontend",
        FRONTEND,
    ),
)


class StubRegistry:
    """Registry of stub targets, kept in registration order."""

    def __init__(self):
        self._targets: Dict[str, StubTarget] = {}

    def register(self, target: StubTarget, replace: bool = False):
        """
        Register a stub target.

        Args:
            target: Stub target to register
            replace: If True, replace an existing registration

        Raises:
            RegistryError: If the stub is already registered and replace is False
        """
        if not target.stub:
            raise RegistryError("Stub target must have a stub name")

        if target.stub in self._targets and not replace:
            raise RegistryError(f"Stub '{target.stub}' is already registered")

        self._targets[target.stub] = target

    def unregister(self, stub: str):
        self._targets.pop(stub, None)

    def get_target(self, stub: str) -> StubTarget:
        """
        Get the target registered for a stub.

        Raises:
            RegistryError: If stub not found
        """
        if stub in self._targets:
            return self._targets[stub]

        raise RegistryError(
            f"No target registered for stub: {stub}. "
            f"Available: {', '.join(self.list_stubs())}"
        )

    def is_registered(self, stub: str) -> bool:
        return stub in self._targets

    def list_stubs(self) -> List[str]:
        return list(self._targets)

    def targets(self, layer: Optional[str] = None) -> List[StubTarget]:
        """All targets in registration order, optionally for one layer."""
        return [
            target
            for target in self._targets.values()
            if layer is None or target.layer == layer
        ]


def create_default_registry() -> StubRegistry:
    """Create a registry holding the default Laravel targets."""
    registry = StubRegistry()
    for target in DEFAULT_TARGETS:
        registry.register(target)
    return registry
