"""Flutter source generation for the mobile UI.

Produces the entry point (theme plus named routes for every screen, in
screen order), one widget file per screen, the ``pubspec.yaml`` build
descriptor and the Amplify bootstrap configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

from sigma_codegen.generators.components import dart_color, dart_string, emit_component
from sigma_codegen.spec.models import AppSpecification, ComponentType, NavigationConfig, Screen
from sigma_codegen.templating.engine import TemplateEngine
from sigma_codegen.templating.helpers import pascal_case, snake_case

DEFAULT_DESCRIPTION = "A Flutter application"


@dataclass(frozen=True)
class ScreenEntry:
    """Naming for one screen, shared by ``main.dart`` and the screen file."""

    screen: Screen
    base_name: str
    class_name: str

    @property
    def file_name(self) -> str:
        return f"{self.base_name}_screen.dart"

    @property
    def path(self) -> str:
        return f"lib/screens/{self.file_name}"

    @property
    def route(self) -> str:
        return f"/{self.base_name}"


def dart_class_name(name: str, fallback: str) -> str:
    """PascalCase class name that never starts with a digit."""
    pascal = pascal_case(name) or fallback
    if pascal[0].isdigit():
        pascal = fallback + pascal
    return pascal


def dart_package_name(app_name: str) -> str:
    """Lower snake-case package name valid for ``pubspec.yaml``."""
    package = snake_case(app_name) or "sigma_app"
    if package[0].isdigit():
        package = f"app_{package}"
    return package


def screen_entries(app: AppSpecification) -> list[ScreenEntry]:
    """Name every screen, de-duplicating collisions by position suffix."""
    entries: list[ScreenEntry] = []
    used: set[str] = set()
    used_classes: set[str] = set()
    for position, screen in enumerate(app.screens, start=1):
        stem = snake_case(screen.name) or snake_case(screen.id) or "screen"
        if stem[0].isdigit():
            stem = f"screen_{stem}"
        base = stem
        suffix = position
        # A suffixed name can itself belong to a later or earlier screen.
        while base in used or _screen_class(base) in used_classes:
            base = f"{stem}_{suffix}"
            suffix += 1
        used.add(base)
        used_classes.add(_screen_class(base))
        entries.append(
            ScreenEntry(screen=screen, base_name=base, class_name=_screen_class(base))
        )
    return entries


def _screen_class(base: str) -> str:
    return dart_class_name(base, "Screen") + "Screen"


class FlutterGenerator:
    """Maps an app specification to Flutter source files."""

    def __init__(self, engine: TemplateEngine) -> None:
        self.engine = engine

    def generate(self, app: AppSpecification) -> dict[str, str]:
        """Return ``{path: source}`` for the whole mobile project."""
        entries = screen_entries(app)
        files: dict[str, str] = {
            "lib/main.dart": self.generate_main_dart(app, entries),
            "pubspec.yaml": self.generate_pubspec(app),
            "lib/amplifyconfiguration.dart": self.engine.render("flutter-amplify-config", {}),
        }
        for entry in entries:
            files[entry.path] = self.generate_screen(entry, app)
        return files

    def generate_main_screen(self, app: AppSpecification) -> str:
        """Render only the default screen, for previews."""
        entries = screen_entries(app)
        default = app.default_screen()
        entry = next((e for e in entries if e.screen is default), None)
        if entry is None:
            entry = ScreenEntry(screen=Screen(name="Home"), base_name="home", class_name="HomeScreen")
        return self.generate_screen(entry, app)

    def generate_main_dart(self, app: AppSpecification, entries: list[ScreenEntry]) -> str:
        default = app.default_screen()
        home = next((e for e in entries if e.screen is default), None)
        return self.engine.render(
            "flutter-main",
            {
                "app_name": app.name,
                "class_name": dart_class_name(app.name, "Generated"),
                "package_name": app.package_name,
                "title": dart_string(app.name),
                "theme": app.theme,
                "primary_color": dart_color(app.theme.primary_color, "#2196F3"),
                "secondary_color": dart_color(app.theme.secondary_color, "#FFC107"),
                "font_family": dart_string(app.theme.font_family),
                "screens": [
                    {"file_name": e.file_name, "class_name": e.class_name, "route": e.route}
                    for e in entries
                ],
                "home_route": home.route if home else "/",
            },
        )

    def generate_screen(self, entry: ScreenEntry, app: AppSpecification) -> str:
        screen = entry.screen
        navigation = screen.navigation or NavigationConfig()
        kinds = {component.kind for component in screen.components}
        return self.engine.render(
            "flutter-screen",
            {
                "class_name": entry.class_name,
                "screen_name": screen.name,
                "title": dart_string(navigation.header_title or screen.name),
                "show_header": navigation.show_header,
                "navigation": navigation,
                "theme": app.theme,
                "uses_datastore": ComponentType.LIST in kinds,
                "uses_forms": ComponentType.FORM in kinds,
                "components": [
                    emit_component(component, app.database_schema)
                    for component in screen.components
                ],
            },
        )

    def generate_pubspec(self, app: AppSpecification) -> str:
        return self.engine.render(
            "flutter-pubspec",
            {
                "app_name": app.name,
                "package": dart_package_name(app.name),
                "package_name": app.package_name,
                "description": app.description or DEFAULT_DESCRIPTION,
            },
        )
