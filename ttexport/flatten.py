"""
Flattening of candidates and their side-loaded job applications into rows.

One candidate with several job applications becomes several rows; a
candidate without any still gets one row so nobody drops out of the export.
"""

from typing import Dict, Iterable, List

from .models import CsvRow, Resource

JOB_APPLICATIONS = "job-applications"


def index_included(included: Iterable[Resource], resource_type: str = JOB_APPLICATIONS) -> Dict[str, Resource]:
    """Map id -> resource for the side-loaded records of one type.

    Built per page: Teamtailor side-loads a candidate's applications in the
    same response as the candidate.
    """
    return {r.id: r for r in included if r.type == resource_type}


def candidate_to_rows(candidate: Resource, job_apps: Dict[str, Resource]) -> List[CsvRow]:
    candidate_id = candidate.id
    first_name = candidate.attribute("first-name")
    last_name = candidate.attribute("last-name")
    email = candidate.attribute("email")

    refs = candidate.related_ids(JOB_APPLICATIONS)
    if refs:
        rows = []
        for ref_id in refs:
            job_app = job_apps.get(ref_id)
            rows.append(CsvRow(
                candidate_id=candidate_id,
                first_name=first_name,
                last_name=last_name,
                email=email,
                job_application_id=ref_id,
                # Unresolved references keep their row with a blank timestamp
                job_application_created_at=job_app.attribute("created-at") if job_app else "",
            ))
        return rows

    return [
        CsvRow(
            candidate_id=candidate_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            job_application_id="",
            job_application_created_at="",
        )
    ]
