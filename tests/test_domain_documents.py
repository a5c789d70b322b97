import json
import unittest
from pathlib import Path

from fakes import TARGETS, make_environment

from ta_sdk.domain import (
    AssessmentUnit,
    AssessmentUnitMetadata,
    AssessmentUnitRecommendation,
    ContentMask,
    Environment,
    Recommendation,
    Report,
    ReportType,
    Target,
    build_recommendation_document,
    environment_from_json,
    environment_to_json,
    filter_targets,
    report_file_name,
)


class TestEnvironmentDocument(unittest.TestCase):
    def test_keys_and_embedded_metadata(self) -> None:
        doc = environment_to_json(make_environment("A1"))

        self.assertEqual(
            [
                "domain",
                "operatingSystem",
                "hostName",
                "middlewareName",
                "middlewareVersion",
                "middlewareInstallPath",
                "middlewareDataPath",
                "middlewareMetadata",
                "assessmentName",
                "assessmentType",
                "assessmentMetadata",
            ],
            list(doc),
        )
        self.assertEqual('{"feature":"drilling"}', doc["middlewareMetadata"])
        self.assertEqual('{"test":"value"}', doc["assessmentMetadata"])

    def test_none_fields_are_omitted(self) -> None:
        doc = environment_to_json(Environment(assessment_name="A1", domain="Java"))
        self.assertEqual({"domain": "Java", "assessmentName": "A1"}, doc)

    def test_document_reads_back(self) -> None:
        env = make_environment("A1", execution_context_type=None)
        back = environment_from_json(json.loads(json.dumps(environment_to_json(env))))
        self.assertEqual(env, back)


class TestRecommendationDocument(unittest.TestCase):
    def _rec(self) -> Recommendation:
        return Recommendation(
            "A1",
            [AssessmentUnitRecommendation("U1", [dict(t) for t in TARGETS], {"complexity": "simple"})],
            {"summary": "ok", "assessmentUnits": "ignored"},
        )

    def test_combined_document(self) -> None:
        assessment_dir = Path("/out/A1")
        unit = AssessmentUnit("U1", config_files=[assessment_dir / "U1" / "conf" / "server.xml"])
        doc = build_recommendation_document(
            self._rec(), make_environment("A1"), [unit], assessment_dir=assessment_dir
        )

        self.assertEqual("Java", doc["domain"])
        self.assertEqual("fakemw", doc["middleware"])
        self.assertEqual("9.0", doc["version"])
        self.assertEqual("host1", doc["host"])
        self.assertEqual("Linux", doc["operatingSystem"])
        self.assertEqual("A1", doc["assessmentName"])
        self.assertEqual("fake", doc["assessmentType"])
        self.assertEqual("ok", doc["summary"])

        (au,) = doc["assessmentUnits"]
        self.assertEqual("U1", au["name"])
        self.assertEqual("simple", au["complexity"])
        self.assertEqual(["LIBERTY", "OPENSHIFT"], [t["id"] for t in au["targets"]])
        self.assertEqual(["U1/conf/server.xml"], au["configFiles"])

    def test_target_filter(self) -> None:
        env = make_environment("A1")

        doc = build_recommendation_document(self._rec(), env, [], target_ids=frozenset({"OPENSHIFT", "X"}))
        self.assertEqual(["OPENSHIFT"], [t["id"] for t in doc["assessmentUnits"][0]["targets"]])

        doc = build_recommendation_document(self._rec(), env, [], target_ids=frozenset({"NOPE"}))
        self.assertNotIn("targets", doc["assessmentUnits"][0])
        self.assertNotIn("configFiles", doc["assessmentUnits"][0])

    def test_filter_targets_empty_selection_keeps_all(self) -> None:
        self.assertEqual(2, len(filter_targets(TARGETS, frozenset())))


class TestAssessmentUnitMetadata(unittest.TestCase):
    def test_metadata_from_environment(self) -> None:
        env = make_environment("A1", execution_context_type="archive", execution_context_name="was.zip")
        meta = AssessmentUnitMetadata.for_environment(env, "U1")
        meta.add_identifier("cell", "cell01")

        doc = meta.to_json()
        self.assertEqual("2.1.3", doc["dcVersion"])
        self.assertEqual("fakemw", doc["middleware"])
        self.assertEqual("archive", doc["archiveType"])
        self.assertEqual("was.zip", doc["archiveName"])
        self.assertEqual({"assessmentUnitName": "U1", "cell": "cell01"}, doc["identifier"])

    def test_none_fields_are_omitted(self) -> None:
        doc = AssessmentUnitMetadata(domain=None, middleware="mw", host=None, assessment_unit_name="U1").to_json()
        self.assertNotIn("archiveType", doc)
        self.assertNotIn("domain", doc)


class TestContentMaskAndReport(unittest.TestCase):
    def test_substitution_mask(self) -> None:
        mask = ContentMask.substitutions([r".*\.xml"], [(r"password=\S+", "password=****")])

        self.assertTrue(mask.matches("/opt/app/server.xml"))
        self.assertFalse(mask.matches("/opt/app/server.xml.bak"))
        self.assertEqual(["a", "password=****"], mask.mask(["a", "password=secret"]))

    def test_report_file_name(self) -> None:
        target = Target("Private", "Liberty")
        self.assertEqual("recommendations_Private_Liberty.html", report_file_name(target, ReportType.HTML))
        self.assertEqual("recommendations_Private_Liberty.txt", report_file_name(target, ReportType.TEXT))

        report = Report("U1", target, ReportType.JSON, "{}")
        self.assertEqual(b"{}", report.content_bytes())
        self.assertEqual("recommendations_Private_Liberty.json", report.file_name())


if __name__ == "__main__":
    unittest.main()
