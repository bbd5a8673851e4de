"""
Simulated AI content generation.

Everything here is template substitution: titles come from one of three
fixed sets picked at random, the rest is interpolated text.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

BASE_HASHTAGS = (
    "#youtube", "#contentcreator", "#youtubetips", "#youtubegrowth",
    "#videomarketing", "#socialmedia", "#contentcreation", "#youtuber",
    "#digitalmarketing", "#youtubechannel", "#contentmarketing", "#videocontent",
    "#youtubestrategy", "#growyourchannel", "#youtubealgorithm",
)
MAX_HASHTAGS = 20


@dataclass
class ContentForm:
    topic: str
    tone: str = "Motivational"
    audience: str = "Everyone"
    keywords: str = ""
    video_type: str = "Long Video"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ContentForm":
        """Build a form from request data; the topic is mandatory."""
        topic = str(payload.get("topic") or "").strip()
        if not topic:
            raise ValueError("Please enter a video topic")
        return cls(
            topic=topic,
            tone=str(payload.get("tone") or cls.tone),
            audience=str(payload.get("audience") or cls.audience),
            keywords=str(payload.get("keywords") or ""),
            video_type=str(payload.get("video_type") or payload.get("videoType") or cls.video_type),
        )


@dataclass
class GeneratedContent:
    topic: str
    tone: str
    audience: str
    keywords: str
    video_type: str
    titles: list[str] = field(default_factory=list)
    description: str = ""
    hashtags: str = ""
    thumbnails: list[str] = field(default_factory=list)
    script: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def _title_sets(base: str, tone: str, audience: str, video_type: str) -> list[list[str]]:
    return [
        [
            f"{base} – Complete {tone} Guide for {audience}",
            f"How I Mastered {base} (Step-by-Step Tutorial)",
            f"{base}: Everything You Need to Know in 2024",
            f"The Ultimate {base} Strategy That Actually Works",
            f"{base} Explained in 10 Minutes ({video_type})",
            f"Stop Doing {base} Wrong – Here's the Right Way",
            f"{base}: From Beginner to Pro in 30 Days",
            f"I Tried {base} for 90 Days – Here's What Happened",
            f"{base} Secrets Nobody Tells You About",
            f"The Only {base} Video You'll Ever Need",
        ],
        [
            f"{base} – The {tone} Approach That Changed Everything",
            f"Master {base} in Record Time (Proven Method)",
            f"{base}: The 2024 Blueprint for {audience}",
            f"Why {base} is Easier Than You Think",
            f"{base} Tutorial – {video_type} Edition",
            f"The {base} Mistakes Costing You Success",
            f"{base}: Zero to Hero in 60 Days",
            f"My {base} Journey – Results After 6 Months",
            f"Hidden {base} Techniques Pros Use Daily",
            f"Everything About {base} in One Video",
        ],
        [
            f"{base} – {tone} Masterclass for {audience}",
            f"The {base} System That Actually Works",
            f"{base}: Advanced Strategies for 2024",
            f"How to Dominate {base} Like a Pro",
            f"{base} Crash Course ({video_type})",
            f"Common {base} Errors and How to Fix Them",
            f"{base}: Complete Transformation Guide",
            f"I Tested {base} for 3 Months – Shocking Results",
            f"{base} Hacks Nobody Talks About",
            f"The Definitive {base} Tutorial",
        ],
    ]


def generate_titles(
    topic: str, tone: str, audience: str, video_type: str, rng: random.Random | None = None
) -> list[str]:
    base = topic or "Your YouTube video"
    sets = _title_sets(base, tone, audience, video_type)
    return list((rng or random).choice(sets))


def _squash(value: str) -> str:
    return "".join(value.split())


def generate_description(topic: str, tone: str, audience: str, keywords: str, video_type: str) -> str:
    kw = f"Key topics: {keywords}\n\n" if keywords else ""
    return (
        f"{topic}\n\n"
        f"{kw}"
        f"This {video_type.lower()} is designed in a {tone.lower()} tone for {audience.lower()}. "
        "You'll learn practical strategies you can use immediately.\n\n"
        "⏱️ TIMESTAMPS:\n"
        "00:00 – Introduction\n"
        "02:15 – Core concepts explained\n"
        "05:30 – Real-world examples\n"
        "08:45 – Pro tips and tricks\n"
        "12:00 – Final thoughts & next steps\n\n"
        "👍 If this helped, please like, subscribe, and share!\n\n"
        f"#{_squash(topic)} #YouTube #ContentCreation"
    )


def generate_hashtags(topic: str, audience: str) -> str:
    tags = list(BASE_HASHTAGS)
    if topic:
        tags.append("#" + _squash(topic.lower()))
    if audience:
        tags.append("#" + _squash(audience.lower()))
    return " ".join(tags[:MAX_HASHTAGS])


def generate_thumbnails(topic: str) -> list[str]:
    return [
        f'Bold text "{topic}" with contrasting background colors (red/yellow split)',
        "Close-up of creator with shocked expression pointing at text overlay",
        "Before/After comparison split screen with clear visual difference",
        "Minimalist design: Large text on solid color with small icon/emoji",
        "Over-the-shoulder shot of screen/workspace with highlighted element",
    ]


def generate_script(topic: str, audience: str) -> str:
    return (
        "🎬 INTRO (0:00 - 0:30)\n"
        f'Hook: Start with a bold statement or question about "{topic}"\n'
        "Preview the transformation viewers will experience\n"
        "Quick self-introduction\n\n"
        "📚 CONTEXT (0:30 - 2:00)\n"
        f"Explain why {audience.lower()} need to know about this\n"
        "Common mistakes people make\n"
        "What makes this approach different\n\n"
        "🎯 MAIN CONTENT (2:00 - 10:00)\n"
        "Step 1: Foundation and preparation\n"
        "Step 2: Core implementation strategy\n"
        "Step 3: Advanced techniques and optimization\n"
        "Step 4: Common pitfalls to avoid\n\n"
        "💡 EXAMPLES (10:00 - 12:00)\n"
        "Real-world case study or demonstration\n"
        "Show actual results and outcomes\n\n"
        "🎁 CONCLUSION (12:00 - 13:00)\n"
        "Recap the 3 key takeaways\n"
        "Call-to-action: Like, subscribe, comment\n"
        "Tease next video topic"
    )


def generate_all(form: ContentForm, rng: random.Random | None = None) -> GeneratedContent:
    return GeneratedContent(
        topic=form.topic,
        tone=form.tone,
        audience=form.audience,
        keywords=form.keywords,
        video_type=form.video_type,
        titles=generate_titles(form.topic, form.tone, form.audience, form.video_type, rng),
        description=generate_description(form.topic, form.tone, form.audience, form.keywords, form.video_type),
        hashtags=generate_hashtags(form.topic, form.audience),
        thumbnails=generate_thumbnails(form.topic),
        script=generate_script(form.topic, form.audience),
    )


def _numbered(items: list[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, 1))


def export_text(content: Mapping[str, Any]) -> str:
    """Plain-text export of generated content (the youtube-content.txt download)."""
    return (
        f"TOPIC: {content.get('topic', '')}\n\n"
        f"=== TITLES ===\n{_numbered(list(content.get('titles') or []))}\n\n"
        f"=== DESCRIPTION ===\n{content.get('description', '')}\n\n"
        f"=== HASHTAGS ===\n{content.get('hashtags', '')}\n\n"
        f"=== THUMBNAIL IDEAS ===\n{_numbered(list(content.get('thumbnails') or []))}\n\n"
        f"=== SCRIPT ===\n{content.get('script', '')}"
    )
