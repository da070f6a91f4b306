"""Turn past likes/dislikes into a short steering hint for prompts."""

from .models import UserPreferences

# Only the most recent ratings are surfaced so the prompt stays bounded
MAX_RATED = 5


def build_context(prefs: UserPreferences | None) -> str:
    """Render at most MAX_RATED liked and MAX_RATED disliked articles.

    Both lists are already most-recent-first. Returns "" when there is
    nothing to say.
    """
    if prefs is None:
        return ""

    lines: list[str] = []
    if prefs.liked:
        liked = ", ".join(
            f'"{a.title}" ({a.category})' for a in prefs.liked[:MAX_RATED]
        )
        lines.append(
            "USER FEEDBACK - POSITIVE: The user previously found these articles "
            f"helpful: {liked}. Prioritize similar topics, sources, or depth."
        )
    if prefs.disliked:
        disliked = ", ".join(f'"{a.title}"' for a in prefs.disliked[:MAX_RATED])
        lines.append(
            f"USER FEEDBACK - NEGATIVE: The user disliked these articles: {disliked}. "
            "Avoid similar content."
        )

    return "\n".join(lines) + "\n" if lines else ""
