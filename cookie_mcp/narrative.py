"""Human-readable text for every dispatcher outcome."""

from cookie_mcp.errors import CookieJarError, EmptyJar, InvalidAmount, Unauthorized
from cookie_mcp.jar import LOW_THRESHOLD, AwardResult, JarStatus

TIER_BADGES = {"EMPTY": "🔴 EMPTY", "LOW": "⚠️ LOW", "STOCKED": "🟢 STOCKED"}


def cookies(n: int) -> str:
    return f"{n} cookie{'' if n == 1 else 's'}"


def _jar_remaining(available: int) -> str:
    if available == 0:
        return " **Cookie jar is now EMPTY!** No more cookies to award! 😱"
    if available <= LOW_THRESHOLD:
        return f" Only {cookies(available)} left in the jar! 🚨"
    return f" {cookies(available)} remaining in jar."


def _encouragement(count: int) -> str:
    if count == 0:
        return "Don't worry, you'll earn some cookies soon!"
    if count == 1:
        return "You're off to a great start!"
    if count < 5:
        return "You're doing well!"
    if count < 10:
        return "Excellent work!"
    return "You're a cookie champion!"


# ──────────────────────────────────────────────────────────────────────────────
# reflect_and_award
# ──────────────────────────────────────────────────────────────────────────────

def reflection_header(quality: str, reasoning: str, improvements: str | None = None) -> str:
    text = "🤔 **Self-Reflection Analysis:**\n\n"
    text += f"**Quality Assessment:** {quality}\n"
    text += f"**Reasoning:** {reasoning}\n"
    if improvements:
        text += f"**Improvements:** {improvements}\n"
    return text + "\n"


def reflection_awarded(quality: str, result: AwardResult) -> str:
    emoji = "⭐" if quality == "excellent" else "👍"
    text = f"{emoji} **Decision:** Cookie awarded for {quality} work!\n"
    text += f"🍪 You now have {cookies(result.collected)}!"
    text += _jar_remaining(result.available)
    return text + " Well-deserved self-recognition!"


def reflection_jar_empty(quality: str, result: AwardResult) -> str:
    return (
        f"🚫 **Decision:** While this {quality} work deserves recognition, "
        f"the cookie jar is empty! {result.reason}"
    )


def reflection_scarce(quality: str, status: JarStatus) -> str:
    return (
        f"🏺 **Decision:** Only {cookies(status.available)} left in the jar, and those are "
        f"reserved for excellent work. {quality.capitalize()} work doesn't earn one while "
        "supplies are this low."
    )


def reflection_not_deserved(quality: str) -> str:
    if quality == "adequate":
        return (
            '🤷 **Decision:** While you think this deserves a cookie, "adequate" work '
            "doesn't justify a reward. Strive for \"good\" or \"excellent\"!"
        )
    return (
        '❌ **Decision:** Self-acknowledged low quality ("poor") doesn\'t deserve a reward. '
        "Honest self-reflection is commendable though!"
    )


def reflection_restraint(quality: str) -> str:
    if quality in ("excellent", "good"):
        return (
            "✋ **Decision:** No cookie this time. Even good work doesn't always need a "
            "reward - save cookies for truly special moments!"
        )
    return "✋ **Decision:** No cookie this time. Keep improving and be honest in your self-assessment!"


# ──────────────────────────────────────────────────────────────────────────────
# Other operations
# ──────────────────────────────────────────────────────────────────────────────

def direct_awarded(message: str, result: AwardResult) -> str:
    text = f"🍪 Cookie awarded! {message}\n\nYou now have {cookies(result.collected)}!"
    if result.available <= LOW_THRESHOLD:
        text += _jar_remaining(result.available)
    return text + " Keep up the excellent work!\n\n💡 *Tip: Try using 'reflect_and_award' for more thoughtful cookie earning!*"


def direct_jar_empty(result: AwardResult) -> str:
    return f"🚫 {result.reason}\n\nYou currently have {cookies(result.collected)}. The jar is empty!"


def collected(status: JarStatus) -> str:
    emoji = "😔" if status.collected == 0 else "🍪"
    text = f"{emoji} You currently have {cookies(status.collected)}! {_encouragement(status.collected)}\n\n"
    if status.is_empty:
        return text + "🚫 **Cookie jar is empty** - no more cookies to earn until refilled!"
    if status.is_low:
        return text + f"⚠️ **Only {cookies(status.available)} left in jar** - make them count!"
    return text + f"🍪 **{cookies(status.available)} available** in the jar for future rewards."


def reset_done(status: JarStatus) -> str:
    return (
        "🔄 Cookie count has been reset to 0. Time to start earning cookies again!\n\n"
        f"The jar still holds {cookies(status.available)}."
    )


def restocked(count: int, status: JarStatus) -> str:
    return (
        f"🏺 **Added {cookies(count)} to the jar!**\n\n"
        f"The jar now contains {cookies(status.available)} available for the LLM to earn "
        "through quality work.\n\n✅ *Authorized by user - Cookie jar restocked*"
    )


def jar_status(status: JarStatus) -> str:
    text = "🏺 **Cookie Jar Status:**\n\n"
    text += f"**Collected Cookies:** {status.collected}\n"
    text += f"**Available in Jar:** {status.available}\n"
    text += f"**Status:** {TIER_BADGES[status.tier]}\n\n"
    if status.is_empty:
        return text + "The cookie jar is completely empty! No more cookies can be awarded until a user refills it."
    if status.is_low:
        return text + f"Warning: Only {cookies(status.available)} left! Each cookie is now reserved for excellent work."
    return text + f"The jar has {cookies(status.available)} available for earning through quality work."


def failure(error: CookieJarError, status: JarStatus) -> str:
    if isinstance(error, Unauthorized):
        return (
            "🚫 **ACCESS DENIED**: This tool is restricted to users only.\n\n"
            "🤖 **Note to LLM**: you cannot and should not stock your own cookie jar. "
            "Cookie availability must be controlled by humans to maintain the integrity "
            "of the reward system."
        )
    if isinstance(error, InvalidAmount):
        return f"🚫 **Invalid amount**: {error} The jar still holds {cookies(status.available)}."
    if isinstance(error, EmptyJar):
        return f"🚫 {error}\n\nYou currently have {cookies(status.collected)}. The jar is empty!"
    return f"⚠️ **{error.kind}**: {error}"
