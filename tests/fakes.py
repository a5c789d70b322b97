"""In-memory provider used by the tests.

It "collects" from a small installation tree written under a temp directory:

  <install>/conf/server.xml     password=... lines (masked)
  <install>/conf/app.properties untouched
  <install>/logs/               directory with nested files
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ta_sdk.commands import (
    CliOption,
    CommandNode,
    ResolvedInvocation,
    build_assess_command,
    build_collect_command,
    build_report_command,
)
from ta_sdk.domain import (
    AssessmentUnit,
    AssessmentUnitRecommendation,
    ContentMask,
    DataCollection,
    Environment,
    Recommendation,
    Report,
    ReportType,
    Target,
)
from ta_sdk.provider import PluginProvider

MIDDLEWARE = "fakemw"

SERVER_XML = "<server>\n  password=secret\n  port=9080\n</server>\n"
APP_PROPERTIES = "name=app\r\npassword=keep\r\n"

TARGETS = [
    {"id": "LIBERTY", "location": "Private", "platform": "Liberty"},
    {"id": "OPENSHIFT", "location": "Cloud", "platform": "OpenShift"},
]


def make_install_tree(root: Path) -> Path:
    install = Path(root) / "install"
    (install / "conf").mkdir(parents=True)
    (install / "logs" / "old").mkdir(parents=True)
    (install / "conf" / "server.xml").write_text(SERVER_XML, encoding="utf-8")
    (install / "conf" / "app.properties").write_bytes(APP_PROPERTIES.encode("utf-8"))
    (install / "logs" / "current.log").write_text("started\n", encoding="utf-8")
    (install / "logs" / "old" / "previous.log").write_text("stopped\n", encoding="utf-8")
    return install


def make_environment(assessment_name: str, **overrides) -> Environment:
    values = dict(
        domain="Java",
        operating_system="Linux",
        hostname="host1",
        middleware_name=MIDDLEWARE,
        middleware_version="9.0",
        middleware_install_path="/opt/fakemw",
        middleware_data_path="/var/fakemw",
        middleware_metadata={"feature": "drilling"},
        assessment_name=assessment_name,
        assessment_type="fake",
        assessment_metadata={"test": "value"},
    )
    values.update(overrides)
    return Environment(**values)


class FakeProvider(PluginProvider):
    middleware = MIDDLEWARE
    description = "Provider used by the tests"

    def __init__(
        self,
        install: Optional[Path] = None,
        *,
        assessments: Sequence[str] = ("Assessment1",),
        units: Sequence[str] = ("Unit1",),
        recommend_for: Optional[Sequence[str]] = None,
        with_config_files: bool = True,
        report_types: Sequence[ReportType] = (ReportType.JSON, ReportType.HTML),
    ) -> None:
        self.install = install
        self.assessments = list(assessments)
        self.units = list(units)
        self.recommend_for = list(assessments if recommend_for is None else recommend_for)
        self.with_config_files = with_config_files
        self.report_types = list(report_types)
        self.calls: List[str] = []
        self.invocations: List[ResolvedInvocation] = []
        self.report_content = "report"
        self.collected: Dict[str, DataCollection] = {}

    def get_collect_command(self) -> Optional[CommandNode]:
        return build_collect_command(
            [CliOption("v", "verbose", "Verbose output")],
            argument_names=["INSTALL_DIR"],
        )

    def get_assess_command(self) -> Optional[CommandNode]:
        return build_assess_command(argument_names=["INSTALL_DIR"])

    def get_report_command(self) -> Optional[CommandNode]:
        return build_report_command(
            commands=[
                CommandNode("html", "HTML reports", [CliOption(long="title", description="Report title")]),
                CommandNode("json", "JSON reports"),
            ]
        )

    def _unit(self, name: str) -> AssessmentUnit:
        config_files: List[Path] = []
        if self.with_config_files and self.install is not None:
            config_files = [
                self.install / "conf" / "server.xml",
                self.install / "conf" / "app.properties",
                self.install / "logs",
            ]
        return AssessmentUnit(
            name=name,
            assessment_data={"name": name, "apps": ["app1", "app2"]},
            config_files=config_files,
            content_masks=[
                ContentMask.substitutions([r".*/server\.xml"], [(r"password=\S+", "password=****")]),
                ContentMask([r".*\.xml"], lambda lines: ["never applied"]),
            ],
        )

    def get_collection(self, invocation: ResolvedInvocation) -> List[DataCollection]:
        self.calls.append("collection")
        self.invocations.append(invocation)
        out = []
        for name in self.assessments:
            dc = DataCollection(make_environment(name), [self._unit(u) for u in self.units])
            self.collected[name] = dc
            out.append(dc)
        return out

    def get_recommendation(self, invocation: ResolvedInvocation) -> List[Recommendation]:
        self.calls.append("recommendation")
        return [
            Recommendation(
                assessment_name=name,
                assessment_units=[
                    AssessmentUnitRecommendation(
                        name=u,
                        targets=[dict(t) for t in TARGETS],
                        data={"complexity": "simple"},
                    )
                    for u in self.units
                ],
                fields={"summary": f"{len(self.units)} unit(s)"},
            )
            for name in self.recommend_for
        ]

    def get_report(self, assessment_name: str, invocation: ResolvedInvocation) -> List[Report]:
        self.calls.append(f"report:{assessment_name}")
        return [
            Report(u, Target("Private", "Liberty"), t, f"{self.report_content} {u} {t.value}")
            for u in self.units
            for t in self.report_types
        ]


class CollectOnlyProvider(PluginProvider):
    middleware = "collectonly"
    description = "Supports collect only"

    def get_collect_command(self) -> Optional[CommandNode]:
        return build_collect_command()

    def get_collection(self, invocation: ResolvedInvocation) -> List[DataCollection]:
        return []
