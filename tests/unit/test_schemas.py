"""Tests for core schemas: descriptors, stubs, pages, details, criteria."""

import pytest
from pydantic import ValidationError

from src.core.schemas import (
    EnrichedJob,
    FilterCriteria,
    JobDetail,
    PageResult,
    RequestDescriptor,
    SearchResultStub,
)


class TestRequestDescriptor:
    def test_frozen(self) -> None:
        d = RequestDescriptor(path="/search")
        with pytest.raises(ValidationError):
            d.path = "/jobs/1"  # type: ignore[misc]

    def test_scalar_types_kept(self) -> None:
        d = RequestDescriptor(path="/search", params={"a": True, "b": 15, "c": "x", "d": 1.5})
        assert d.params == {"a": True, "b": 15, "c": "x", "d": 1.5}
        assert isinstance(d.params["b"], int)


class TestSearchResultStub:
    def test_aliases_and_passthrough(self) -> None:
        stub = SearchResultStub.model_validate({
            "jobId": 39680634,
            "jobUrl": "https://www.reed.co.uk/jobs/39680634",
            "employerName": "Acme",
        })
        assert stub.job_id == 39680634
        assert stub.job_url.endswith("39680634")
        assert stub.model_extra == {"employerName": "Acme"}

    def test_job_id_required(self) -> None:
        with pytest.raises(ValidationError):
            SearchResultStub.model_validate({"jobUrl": "x"})


class TestPageResult:
    def test_from_payload(self) -> None:
        page = PageResult.model_validate({
            "results": [{"jobId": 1, "jobUrl": "u1"}, {"jobId": 2, "jobUrl": "u2"}],
            "totalResults": 250,
            "ambiguousLocations": [],
        })
        assert [s.job_id for s in page.items] == [1, 2]
        assert page.total_available == 250

    def test_null_results(self) -> None:
        page = PageResult.model_validate({"results": None, "totalResults": 0})
        assert page.items == []


class TestJobDetail:
    def test_from_payload(self) -> None:
        detail = JobDetail.model_validate({
            "jobId": 1,
            "jobDescription": "<p>Python</p>",
            "datePosted": "23/01/2020",
            "jobUrl": "https://www.reed.co.uk/jobs/1",
            "jobTitle": "Python Developer",
        })
        assert detail.job_description == "<p>Python</p>"
        assert detail.date_posted == "23/01/2020"
        assert detail.model_extra == {"jobTitle": "Python Developer"}

    def test_dump_by_alias_round_trips_original_keys(self) -> None:
        payload = {
            "jobId": 1,
            "jobDescription": "x",
            "datePosted": "23/01/2020",
            "jobUrl": "u",
            "salary": 500,
        }
        assert JobDetail.model_validate(payload).model_dump(by_alias=True) == payload

    def test_null_description(self) -> None:
        detail = JobDetail.model_validate({"jobDescription": None, "datePosted": "01/01/2020"})
        assert detail.job_description == ""

    def test_date_required(self) -> None:
        with pytest.raises(ValidationError):
            JobDetail.model_validate({"jobDescription": "x"})


class TestEnrichedJob:
    def test_negative_days_rejected(self) -> None:
        detail = JobDetail(datePosted="01/01/2020")
        with pytest.raises(ValidationError):
            EnrichedJob(detail=detail, days_ago=-1)


class TestFilterCriteria:
    def test_terms_normalized(self) -> None:
        c = FilterCriteria(keywords="python", match_include=["TDD", " Django "], match_exclude=["AI", ""])
        assert c.match_include == frozenset({"tdd", "django"})
        assert c.match_exclude == frozenset({"ai"})

    def test_defaults(self) -> None:
        c = FilterCriteria(keywords="python")
        assert c.match_include == frozenset()
        assert c.match_exclude == frozenset()
        assert c.max_age_days == 40

    def test_single_string_term(self) -> None:
        assert FilterCriteria(keywords="x", match_exclude="AI").match_exclude == frozenset({"ai"})
