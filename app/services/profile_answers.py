"""Offline question answering over the static profile record.

Answers are assembled from the profile alone, so this path works without any
chat provider configured.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

from app.core.errors import ValidationError
from app.schemas.profile import ProfileRecord

logger = logging.getLogger(__name__)

RELATED_FAMILIES: dict[str, list[str]] = {
    "languages": ["TypeScript", "JavaScript", "Java", "Python", "C", "C++"],
    "databases": ["MongoDB", "MySQL", "SQL Server", "PostgreSQL", "Redis"],
    "servers": ["Tomcat", "Nginx", "Apache", "Node.js", "Express"],
    "web": ["HTML", "CSS", "jQuery", "Bootstrap", "Jade", "XML", "WordPress"],
    "frameworks": ["React", "Angular", "Vue.js", "Meteor", "Express", "NestJS", "Laravel"],
    "ai_tools": ["ChatGPT", "Claude", "Gemini", "Copilot", "Grok"],
}

ALIASES = {
    "html5": "html",
    "html 5": "html",
    "css3": "css",
    "node": "node.js",
    "nodejs": "node.js",
    "vue": "vue.js",
    "vuejs": "vue.js",
    "js": "javascript",
    "ts": "typescript",
    "postgres": "postgresql",
    "mongo": "mongodb",
    "bootstrap5": "bootstrap",
    "git hub": "github",
}

ABOUT_TRIGGERS = ("about him", "about her", "about them", "bio", "summary", "introduce", "who is")

SKILLS_QUESTION_RE = re.compile(
    r"\b(what (technologies|tech stack|tech|skills?) does \w+ (work with|have)|tech stack|list (skills|technologies|tools)|skills)\b",
    re.IGNORECASE,
)

UNKNOWN_TECH_RE = re.compile(
    r"\b(?:experience (?:with|in)|knows?|used|uses|worked with|familiar with)\s+([a-z][a-z0-9.+#-]*)",
    re.IGNORECASE,
)

SECTION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "projects": ("project", "portfolio", "side project"),
    "experience": ("experience", "work", "job", "career", "role", "internship", "intern"),
    "education": ("education", "degree", "university", "school", "studied"),
    "contact": ("contact", "reach", "location", "title"),
}

STOP_WORDS = {
    "a", "an", "the", "it", "this", "that", "any", "anything", "what", "which", "how", "his", "her",
    "their", "me", "you", "about", "and", "or", "in", "on", "with", "for", "to", "of", "is", "are",
    "he", "she", "they", "him", "them", "other", "some", "modern",
}

FALLBACK_ANSWER = (
    "I can answer about skills, projects, experience, education, or contact info. "
    "Ask e.g. \"Tell me about the HTML experience\" or \"What is the tech stack?\""
)


def canon(value: str) -> str:
    token = re.sub(r"\s+", " ", (value or "").strip().lower())
    return ALIASES.get(token, token)


def _first_sentences(text: str, count: int) -> str:
    parts = [part.strip() for part in text.split(".") if part.strip()]
    return ". ".join(parts[:count]) + "." if parts else ""


@dataclass
class _TechIndex:
    display: dict[str, str] = field(default_factory=dict)
    skills: set[str] = field(default_factory=set)
    candidates: list[str] = field(default_factory=list)

    def label(self, tech: str) -> str:
        return self.display.get(tech) or tech.capitalize()


def _index(profile: ProfileRecord) -> _TechIndex:
    index = _TechIndex()
    names: list[str] = []
    for group in profile.skills:
        names.extend(group.skills)
        index.skills.update(canon(skill) for skill in group.skills)
    for job in profile.experience:
        names.extend(job.technologies)
    for project in profile.projects:
        names.extend(project.technologies)
    for family in RELATED_FAMILIES.values():
        names.extend(family)

    for name in names:
        key = canon(name)
        if key:
            index.display.setdefault(key, name)
    # Longest first so "sql server" wins over "sql".
    index.candidates = sorted(index.display, key=len, reverse=True)
    return index


def _token_pattern(token: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9.]){re.escape(token)}(?![a-z0-9+#]|\.[a-z0-9])")


def extract_technologies(question: str, index: _TechIndex) -> list[str]:
    """Known technologies mentioned in ``question``, in order of appearance."""
    text = f" {canon(question)} "
    for alias, target in ALIASES.items():
        text = _token_pattern(alias).sub(target, text)

    found: list[tuple[int, str]] = []
    for token in index.candidates:
        pattern = _token_pattern(token)
        match = pattern.search(text)
        if match is None:
            continue
        found.append((match.start(), token))
        text = pattern.sub(lambda m: " " * len(m.group(0)), text)

    for match in UNKNOWN_TECH_RE.finditer(text):
        word = canon(match.group(1).rstrip("."))
        if word and word not in STOP_WORDS and word not in {token for _, token in found}:
            found.append((match.start(1), word))

    return [token for _, token in sorted(found)]


def _uses(technologies: list[str], tech: str) -> bool:
    return any(canon(item) == tech for item in technologies)


def _present_anywhere(profile: ProfileRecord, index: _TechIndex, tech: str) -> bool:
    return (
        tech in index.skills
        or any(_uses(job.technologies, tech) for job in profile.experience)
        or any(_uses(project.technologies, tech) for project in profile.projects)
    )


def _tech_block(profile: ProfileRecord, index: _TechIndex, tech: str) -> str:
    first_name = profile.name.split()[0] if profile.name else "The candidate"
    label = index.label(tech)
    jobs = [job for job in profile.experience if _uses(job.technologies, tech)]
    projects = [project for project in profile.projects if _uses(project.technologies, tech)]

    if jobs or projects:
        lines: list[str] = []
        if jobs:
            lines.append(f"{first_name} has work experience with {label} at:")
            lines.extend(
                f"• {job.role} - {job.company}" + (f" ({job.duration})" if job.duration else "")
                for job in jobs
            )
        if projects:
            if lines:
                lines.append("")
            lines.append(f"{label} was also used in the project(s):")
            lines.extend(f"• {project.title}" for project in projects)
        return "\n".join(lines)

    if tech in index.skills:
        return (
            f"{first_name} does not have explicit work experience or projects involving {label}, "
            "but it is listed under the skills."
        )

    for family in RELATED_FAMILIES.values():
        members = [canon(member) for member in family]
        if tech not in members:
            continue
        related = [m for m in members if m != tech and _present_anywhere(profile, index, m)]
        if not related:
            related = [m for m in members if m != tech][:3]
        pretty = ", ".join(index.label(m) for m in related)
        return (
            f"I do not see explicit experience with {label}, but based on related technologies "
            f"({pretty}), {first_name} should be able to pick it up quickly."
        )

    return f"I do not see explicit work experience or projects related to {label}."


def _personal_answer(profile: ProfileRecord, lowered: str) -> str | None:
    if any(trigger in lowered for trigger in ABOUT_TRIGGERS):
        about = profile.about
        if len(about) > 400:
            about = _first_sentences(about, 2)
        return about or profile.name
    parts = profile.name.split()
    checks = [
        (r"\bfirst name\b", parts[0] if parts else "", "First name not listed."),
        (r"\blast name\b", parts[-1] if parts else "", "Last name not listed."),
        (r"\b(full name|name)\b", profile.name, "Full name not listed."),
        (r"\bemail\b", profile.email, "Email not listed."),
        (r"\b(phone|phone number)\b", profile.phone, "Phone not listed."),
        (r"\blinkedin\b", profile.linkedin, "LinkedIn not listed."),
        (r"\bgithub\b", profile.github, "GitHub not listed."),
    ]
    for pattern, value, missing in checks:
        if re.search(pattern, lowered):
            return value or missing
    return None


def _skills_answer(profile: ProfileRecord) -> str:
    lines = [f"{group.category}: {', '.join(group.skills)}" for group in profile.skills]
    return "\n".join(lines) or "No skills listed."


def _section_answer(profile: ProfileRecord, section: str) -> str:
    if section == "projects":
        lines = [f"• {p.title}: {_first_sentences(p.description, 1)}" for p in profile.projects]
        return "\n".join(lines) or "No projects listed."
    if section == "experience":
        lines = [
            f"• {job.role} at {job.company}" + (f" ({job.duration})" if job.duration else "")
            for job in profile.experience
        ]
        return "\n".join(lines) or "No experience listed."
    if section == "education":
        lines = [f"• {e.degree} at {e.institution}" + (f" ({e.years})" if e.years else "") for e in profile.education]
        return "\n".join(lines) or "No education listed."
    fields = [
        ("Email", profile.email),
        ("Phone", profile.phone),
        ("LinkedIn", profile.linkedin),
        ("GitHub", profile.github),
        ("Location", profile.location),
        ("Title", profile.title),
    ]
    lines = [f"{label}: {value}" for label, value in fields if value]
    return "\n".join(lines) or "No contact info listed."


def answer_question(message: str, profile: ProfileRecord) -> str:
    question = (message or "").strip()
    if not question:
        raise ValidationError("Please provide a question.")
    lowered = question.lower()

    personal = _personal_answer(profile, lowered)
    if personal is not None:
        return personal

    index = _index(profile)
    techs = extract_technologies(question, index)

    if SKILLS_QUESTION_RE.search(question) and not techs:
        return _skills_answer(profile)

    if not techs:
        for section, keywords in SECTION_KEYWORDS.items():
            if any(keyword in lowered for keyword in keywords):
                return _section_answer(profile, section)
        return FALLBACK_ANSWER

    blocks: list[str] = []
    for tech in dict.fromkeys(techs):
        block = _tech_block(profile, index, tech).strip()
        if block not in blocks:
            blocks.append(block)

    logger.info(json.dumps({"event": "profile_answer", "technologies": list(dict.fromkeys(techs))}))
    return "\n\n".join(blocks) or "No relevant info found."
