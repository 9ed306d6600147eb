"""
End-to-end tests for the exposure scanner.
"""

import threading

import pytest

from config.settings import ScanSettings
from errors import InvalidSubjectError
from models.enums import DataSource, Grade
from models.schema import RawHit
from scanner import ExposureScanner, Subject, assess, to_scan_records
from scoring.risk import REC_CRITICAL_FIRST
from search.client import SearchProvider, SyntheticProvider
from search.orchestrator import SearchTier


class FakeProvider(SearchProvider):
    def __init__(self, name, hits=None):
        super().__init__()
        self._name = name
        self._hits = hits or []
        self.call_count = 0

    @property
    def provider_name(self):
        return self._name

    def _do_search(self, query):
        self.call_count += 1
        return list(self._hits)


def _hit(url, snippet=""):
    return RawHit.from_url(title="Result", link=url, snippet=snippet)


def _providers(primary=None, secondary=None, synthetic=None):
    return {
        SearchTier.PRIMARY: primary or FakeProvider("primary"),
        SearchTier.SECONDARY: secondary or FakeProvider("secondary"),
        SearchTier.SYNTHETIC: synthetic or FakeProvider("synthetic"),
    }


class TestValidation:
    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name_rejected_before_search(self, name):
        primary = FakeProvider("primary", [_hit("https://www.spokeo.com/a")])
        with pytest.raises(InvalidSubjectError):
            assess(name, providers=_providers(primary=primary))
        assert primary.call_count == 0

    def test_invalid_subject_is_value_error(self):
        with pytest.raises(ValueError):
            Subject.create("")

    def test_blank_optionals_become_none(self):
        subject = Subject.create("  Jane   Smith ", city_state=" ", email="", phone=None)
        assert subject.name == "Jane Smith"
        assert subject.city_state is None
        assert subject.email is None


class TestAssess:
    def test_primary_results_only(self):
        primary = FakeProvider("primary", [
            _hit("https://www.spokeo.com/jane"),
            _hit("https://www.whitepages.com/jane"),
        ])
        secondary = FakeProvider("secondary", [_hit("https://radaris.com/x")])
        synthetic = FakeProvider("synthetic", [_hit("https://mylife.com/x")])

        result = assess("Jane Smith", providers=_providers(primary, secondary, synthetic))

        assert result.stats.total_exposures == 2
        assert result.score == 30
        assert result.data_source == DataSource.LIVE
        assert secondary.call_count == 0
        assert synthetic.call_count == 0

    def test_secondary_results(self):
        secondary = FakeProvider("secondary", [
            _hit("https://radaris.com/p/jane"),
            _hit("https://RADARIS.com/p/jane"),
            _hit("https://www.truepeoplesearch.com/find/jane"),
            _hit("https://obscure.example/jane", snippet="Jane's phone number"),
        ])
        synthetic = FakeProvider("synthetic", [_hit("https://mylife.com/x")])

        result = assess("Jane Smith", providers=_providers(secondary=secondary, synthetic=synthetic))

        assert synthetic.call_count == 0
        assert result.stats.total_exposures == 3
        assert {e.site_name for e in result.exposures} == {
            "Radaris", "True People Search", "obscure.example",
        }
        assert result.score == 18 + 12 + 10
        assert result.data_source == DataSource.DEGRADED

    def test_synthetic_jane_smith(self):
        providers = _providers(synthetic=SyntheticProvider(name="Jane Smith"))
        result = assess("Jane Smith", providers=providers)

        assert len(result.exposures) == 10
        assert result.stats.total_exposures == 10
        # 15+15+20+18+12+12+20+22+18+8 = 160, capped
        assert result.score == 100
        assert result.grade == Grade.F
        assert result.stats.critical_count == 4
        assert result.recommendations[0] == REC_CRITICAL_FIRST
        assert result.exposures[0].severity.value == "critical"
        assert result.data_source == DataSource.SYNTHETIC

    def test_synthetic_with_email(self):
        providers = _providers(
            synthetic=SyntheticProvider(name="Jane Smith", email="jane@example.com"),
        )
        result = assess("Jane Smith", email="jane@example.com", providers=providers)
        assert len(result.exposures) == 11

    def test_default_synthetic_keyed_by_subject(self):
        scanner = ExposureScanner(
            settings=ScanSettings(secondary_enabled=False),
        )
        result = scanner.scan("Jane Smith", email="jane@example.com")
        assert len(result.hits) == 11
        assert result.run.tier == SearchTier.SYNTHETIC
        assert result.assessment.data_source == DataSource.SYNTHETIC

    def test_deterministic(self):
        a = assess("Jane Smith", providers=_providers(synthetic=SyntheticProvider(name="Jane Smith")))
        b = assess("Jane Smith", providers=_providers(synthetic=SyntheticProvider(name="Jane Smith")))
        assert a == b

    def test_nothing_found(self):
        result = assess("Jane Smith", providers=_providers())
        assert result.score == 0
        assert result.grade == Grade.A
        assert result.data_source == DataSource.NONE

    def test_empty_provider_map_searches_nothing(self):
        result = assess("Jane Smith", providers={})
        assert result.stats.total_exposures == 0
        assert result.data_source == DataSource.NONE

    def test_primary_calls_bounded_by_variant_cap(self):
        primary = FakeProvider("primary")
        scanner = ExposureScanner(
            settings=ScanSettings(max_variants=3),
            providers=_providers(primary=primary),
        )
        scanner.assess("Jane Smith", "Austin, TX", "jane@example.com", "512-555-1234")
        assert primary.call_count == 3

    def test_cancelled(self):
        event = threading.Event()
        event.set()
        primary = FakeProvider("primary", [_hit("https://www.spokeo.com/a")])
        result = assess("Jane Smith", providers=_providers(primary=primary), cancel_event=event)
        assert primary.call_count == 0
        assert result.stats.total_exposures == 0

    def test_stats_invariant(self):
        providers = _providers(synthetic=SyntheticProvider(name="Jane Smith", email="j@x.com"))
        result = assess("Jane Smith", providers=providers)
        s = result.stats
        assert s.total_exposures == len(result.exposures)
        assert s.critical_count + s.high_count + s.medium_count + s.low_count == s.total_exposures


class TestScanRecords:
    def test_records_from_hits(self):
        scanner = ExposureScanner(providers=_providers(
            primary=FakeProvider("primary", [
                _hit("https://www.spokeo.com/a"), _hit("https://www.SPOKEO.com/A"),
            ]),
        ))
        result = scanner.scan("Jane Smith", city_state="Austin, TX")
        subject = Subject.create("Jane Smith", city_state="Austin, TX")

        records = to_scan_records(result.hits, subject, scan_type="scheduled")

        assert len(records) == 1
        assert records[0].status == "new"
        assert records[0].query == "Jane Smith"
        assert records[0].city_state == "Austin, TX"
        assert records[0].source == "spokeo.com"
        assert records[0].scan_type == "scheduled"
