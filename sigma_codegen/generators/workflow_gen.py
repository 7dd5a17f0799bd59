"""GitHub Actions workflow generation.

Generates ``.github/workflows/deploy.yml``, which builds the Flutter app for
Android and iOS and deploys the Amplify backend on pushes to ``main``.
"""

from __future__ import annotations

from sigma_codegen.spec.models import AppSpecification
from sigma_codegen.templating.engine import TemplateEngine

WORKFLOW_PATH = ".github/workflows/deploy.yml"


class WorkflowGenerator:
    """Renders the CI/CD pipeline definition."""

    def __init__(
        self,
        engine: TemplateEngine,
        *,
        flutter_version: str = "3.22.0",
        aws_region: str = "us-east-1",
    ) -> None:
        self.engine = engine
        self.flutter_version = flutter_version
        self.aws_region = aws_region

    def generate(self, app: AppSpecification) -> str:
        return self.engine.render(
            "github-deploy",
            {
                "app_name": app.name,
                "package_name": app.package_name,
                "workflow_name": f"Deploy {app.name} to Amplify",
                "flutter_version": self.flutter_version,
                "aws_region": self.aws_region,
            },
        )
