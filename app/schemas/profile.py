from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EducationEntry(BaseModel):
    degree: str
    institution: str
    years: str = ""
    details: str = ""


class ExperienceEntry(BaseModel):
    company: str
    role: str
    duration: str = ""
    location: str = ""
    summary: str = ""
    achievements: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    title: str
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    link: str = ""


class SkillCategory(BaseModel):
    category: str
    skills: list[str] = Field(default_factory=list)


class ProfileRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    about: str = ""
    education: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    skills: list[SkillCategory] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
