from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from app.schemas.profile import ProfileRecord

PROFILE_PATH = Path(__file__).resolve().parent.parent / "data" / "profile.json"


@lru_cache(maxsize=1)
def load_profile() -> ProfileRecord:
    return ProfileRecord.model_validate_json(PROFILE_PATH.read_text(encoding="utf-8"))


def build_profile_context(profile: ProfileRecord) -> str:
    """Render the profile as the system prompt for the chat assistants."""
    lines = [
        f"You are an AI assistant for {profile.name}'s portfolio website.",
        f"Answer questions about {profile.name}'s background, experience, skills, education, and projects.",
        "Be professional, concise, and helpful. If asked about something not covered below, "
        "politely explain what you do know.",
        "",
        "# Overview",
        f"Name: {profile.name}",
        f"Title: {profile.title}",
        f"Location: {profile.location}",
        f"Email: {profile.email}",
        f"LinkedIn: {profile.linkedin}",
        f"GitHub: {profile.github}",
        profile.about,
        "",
        "# Experience",
    ]
    for job in profile.experience:
        lines.append(f"{job.role} | {job.company}, {job.location} ({job.duration})")
        if job.technologies:
            lines.append(f"  Technologies: {', '.join(job.technologies)}")
        lines.extend(f"  - {item}" for item in job.achievements)

    lines += ["", "# Projects"]
    for project in profile.projects:
        techs = f" | {', '.join(project.technologies)}" if project.technologies else ""
        lines.append(f"{project.title}{techs}")
        if project.description:
            lines.append(f"  - {project.description}")

    lines += ["", "# Skills"]
    lines.extend(f"{group.category}: {', '.join(group.skills)}" for group in profile.skills)

    lines += ["", "# Education"]
    lines.extend(f"{edu.degree} - {edu.institution} ({edu.years})" for edu in profile.education)

    if profile.interests:
        lines += ["", f"Interests: {', '.join(profile.interests)}"]
    return "\n".join(lines).strip()
