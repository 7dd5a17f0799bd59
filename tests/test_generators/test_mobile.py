"""Tests for Flutter project generation (sigma_codegen.generators.mobile)."""

from __future__ import annotations

from typing import Any

import pytest
import yaml

from sigma_codegen.errors import TemplateNotFound
from sigma_codegen.generators.mobile import (
    FlutterGenerator,
    dart_class_name,
    dart_package_name,
    screen_entries,
)
from sigma_codegen.spec.models import AppSpecification
from sigma_codegen.templating.engine import TemplateEngine

pytestmark = pytest.mark.unit


@pytest.fixture
def generator(engine: TemplateEngine) -> FlutterGenerator:
    return FlutterGenerator(engine)


class TestNaming:
    def test_screen_entries(self, sample_app: AppSpecification):
        entries = screen_entries(sample_app)
        assert [e.base_name for e in entries] == ["home", "task_form"]
        assert [e.class_name for e in entries] == ["HomeScreen", "TaskFormScreen"]
        assert entries[1].path == "lib/screens/task_form_screen.dart"
        assert entries[1].route == "/task_form"

    def test_colliding_names_get_position_suffix(self):
        app = AppSpecification.model_validate(
            {"id": "a", "name": "A", "screens": [{"name": "Home"}, {"name": "home"}]}
        )
        assert [e.base_name for e in screen_entries(app)] == ["home", "home_2"]

    def test_suffix_skips_names_already_taken(self, generator: FlutterGenerator):
        app = AppSpecification.model_validate(
            {
                "id": "a",
                "name": "A",
                "screens": [
                    {"name": "Home", "components": [{"id": "c1", "type": "text", "properties": {"text": "first"}}]},
                    {"name": "Home 3", "components": [{"id": "c2", "type": "text", "properties": {"text": "second"}}]},
                    {"name": "Home", "components": [{"id": "c3", "type": "text", "properties": {"text": "third"}}]},
                ],
            }
        )
        entries = screen_entries(app)
        assert [e.base_name for e in entries] == ["home", "home_3", "home_4"]
        assert len({e.class_name for e in entries}) == 3

        files = generator.generate(app)
        screen_files = [path for path in files if path.startswith("lib/screens/")]
        assert len(screen_files) == 3
        assert "'first'" in files["lib/screens/home_screen.dart"]
        assert "'second'" in files["lib/screens/home_3_screen.dart"]
        assert "'third'" in files["lib/screens/home_4_screen.dart"]
        assert files["lib/main.dart"].count("'/home_3'") == 1

    def test_leading_digit(self):
        app = AppSpecification.model_validate(
            {"id": "a", "name": "A", "screens": [{"name": "2nd Page"}]}
        )
        entry = screen_entries(app)[0]
        assert entry.base_name == "screen_2nd_page"
        assert entry.class_name[0].isalpha()

    def test_class_and_package_names(self):
        assert dart_class_name("Task Tracker", "Generated") == "TaskTracker"
        assert dart_class_name("!!!", "Generated") == "Generated"
        assert dart_package_name("Task Tracker") == "task_tracker"
        assert dart_package_name("2048 Game") == "app_2048_game"


class TestGenerate:
    def test_file_set(self, generator: FlutterGenerator, sample_app: AppSpecification):
        files = generator.generate(sample_app)
        assert sorted(files) == [
            "lib/amplifyconfiguration.dart",
            "lib/main.dart",
            "lib/screens/home_screen.dart",
            "lib/screens/task_form_screen.dart",
            "pubspec.yaml",
        ]

    def test_main_wires_every_screen_in_order(
        self, generator: FlutterGenerator, sample_app: AppSpecification
    ):
        main = generator.generate(sample_app)["lib/main.dart"]
        assert "import 'screens/home_screen.dart';" in main
        assert "import 'screens/task_form_screen.dart';" in main
        assert main.index("'/home': (context) => const HomeScreen()") < main.index(
            "'/task_form': (context) => const TaskFormScreen()"
        )
        assert "initialRoute: '/home'," in main
        assert "class TaskTrackerApp extends StatefulWidget" in main

    def test_main_applies_theme(self, generator: FlutterGenerator, sample_app: AppSpecification):
        main = generator.generate(sample_app)["lib/main.dart"]
        assert "title: 'Task Tracker'," in main
        assert "seedColor: Color(0xFF3F51B5)," in main
        assert "secondary: Color(0xFFFF4081)," in main
        assert "fontFamily: 'Inter'," in main
        assert "brightness: Brightness.light," in main

    def test_dark_mode(self, generator: FlutterGenerator, sample_app_data: dict[str, Any]):
        sample_app_data["theme"]["darkMode"] = True
        app = AppSpecification.model_validate(sample_app_data)
        assert "brightness: Brightness.dark," in generator.generate(app)["lib/main.dart"]

    def test_home_route_follows_default_flag(
        self, generator: FlutterGenerator, sample_app_data: dict[str, Any]
    ):
        sample_app_data["screens"][0]["isDefault"] = False
        sample_app_data["screens"][1]["isDefault"] = True
        app = AppSpecification.model_validate(sample_app_data)
        assert "initialRoute: '/task_form'," in generator.generate(app)["lib/main.dart"]

    def test_screen_files(self, generator: FlutterGenerator, sample_app: AppSpecification):
        files = generator.generate(sample_app)
        home = files["lib/screens/home_screen.dart"]
        form = files["lib/screens/task_form_screen.dart"]

        assert "class HomeScreen extends StatefulWidget" in home
        assert "title: Text('Home')," in home
        assert "import '../models/ModelProvider.dart';" in home
        assert "_formKeys" not in home
        assert home.count("Positioned(") == 3

        assert "title: Text('New Task')," in form
        assert "final Map<String, GlobalKey<FormState>> _formKeys = {};" in form
        assert "ModelProvider" not in form

    def test_header_hidden(self, generator: FlutterGenerator, sample_app_data: dict[str, Any]):
        sample_app_data["screens"][0]["navigation"] = {"showHeader": False}
        app = AppSpecification.model_validate(sample_app_data)
        home = generator.generate(app)["lib/screens/home_screen.dart"]
        assert "appBar" not in home

    def test_pubspec_is_valid_yaml(self, generator: FlutterGenerator, sample_app: AppSpecification):
        pubspec = yaml.safe_load(generator.generate(sample_app)["pubspec.yaml"])
        assert pubspec["name"] == "task_tracker"
        assert pubspec["description"] == "Track tasks"
        assert "amplify_flutter" in pubspec["dependencies"]

    def test_pubspec_default_description(
        self, generator: FlutterGenerator, empty_app: AppSpecification
    ):
        pubspec = yaml.safe_load(generator.generate_pubspec(empty_app))
        assert pubspec["description"] == "A Flutter application"

    def test_no_screens(self, generator: FlutterGenerator, empty_app: AppSpecification):
        files = generator.generate(empty_app)
        assert not any(path.startswith("lib/screens/") for path in files)
        assert "No screens yet" in files["lib/main.dart"]

    def test_deterministic(self, generator: FlutterGenerator, sample_app: AppSpecification):
        assert generator.generate(sample_app) == generator.generate(sample_app)

    def test_missing_template_raises(self, sample_app: AppSpecification):
        with pytest.raises(TemplateNotFound):
            FlutterGenerator(TemplateEngine()).generate(sample_app)


class TestMainScreen:
    def test_renders_default_screen(
        self, generator: FlutterGenerator, sample_app: AppSpecification
    ):
        source = generator.generate_main_screen(sample_app)
        assert source == generator.generate(sample_app)["lib/screens/home_screen.dart"]

    def test_placeholder_without_screens(
        self, generator: FlutterGenerator, empty_app: AppSpecification
    ):
        source = generator.generate_main_screen(empty_app)
        assert "class HomeScreen extends StatefulWidget" in source
        assert "Positioned(" not in source
