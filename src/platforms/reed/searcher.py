"""Reed request descriptor builders.

Pure functions, no network access.
"""

from src.core.config import SearchFilters
from src.core.schemas import RequestDescriptor, Scalar

SEARCH_PATH = "/search"

# SearchFilters field → Reed query parameter name
_PARAM_NAMES: dict[str, str] = {
    "location_name": "locationName",
    "distance_from_location": "distanceFromLocation",
    "permanent": "permanent",
    "contract": "contract",
    "temp": "temp",
    "part_time": "partTime",
    "full_time": "fullTime",
    "minimum_salary": "minimumSalary",
    "maximum_salary": "maximumSalary",
    "posted_by_recruitment_agency": "postedByRecruitmentAgency",
    "posted_by_direct_employer": "postedByDirectEmployer",
}


def build_search_params(keywords: str, filters: SearchFilters) -> dict[str, Scalar]:
    """Map keywords and filters to Reed search parameters, omitting unset ones."""
    params: dict[str, Scalar] = {"keywords": keywords}
    for field, name in _PARAM_NAMES.items():
        value = getattr(filters, field)
        if value is not None:
            params[name] = value
    return params


def build_search_descriptor(keywords: str, filters: SearchFilters) -> RequestDescriptor:
    """Template descriptor for a search; pagination params are added per page."""
    return RequestDescriptor(path=SEARCH_PATH, params=build_search_params(keywords, filters))


def build_page_descriptor(
    template: RequestDescriptor,
    skip: int,
    take: int,
) -> RequestDescriptor:
    """Descriptor for one page of a search."""
    return template.with_params(resultsToTake=take, resultsToSkip=skip)


def build_detail_descriptor(job_id: int | str) -> RequestDescriptor:
    """Descriptor for the single-job detail endpoint."""
    return RequestDescriptor(path=f"/jobs/{job_id}")
