from utils.constants import EMPLOYMENT_TYPES, LOCATION_BUCKETS


def location_bucket(location: str) -> str:
    if "Dhaka" in location:
        return "Dhaka"
    if location == "Remote":
        return "Remote"
    return "Other"


def summarize_jobs(jobs: list[dict]) -> dict:
    job_types = dict.fromkeys(EMPLOYMENT_TYPES, 0)
    locations = dict.fromkeys(LOCATION_BUCKETS, 0)

    for job in jobs:
        job_type = job.get("type")
        if job_type in job_types:
            job_types[job_type] += 1
        locations[location_bucket(job.get("location", ""))] += 1

    return {"job_types": job_types, "locations": locations}
