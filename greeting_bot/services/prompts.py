"""Prompt builders for greeting, card and song generation."""

from ..models import SongPrompt, UserInfo

DEFAULT_NAME = "друг"


def build_user_description(user: UserInfo) -> str:
    """Describe the user for the greeting prompt.

    Args:
        user: Telegram user information.

    Returns:
        One line per known attribute, or a placeholder when nothing is known.
    """
    parts = []

    if user.first_name:
        parts.append(f"Имя: {user.first_name}")
    if user.last_name:
        parts.append(f"Фамилия: {user.last_name}")
    if user.username:
        parts.append(f"Username: @{user.username}")
    if user.language_code:
        parts.append(f"Язык: {user.language_code}")
    if user.is_premium:
        parts.append("Premium пользователь Telegram")

    return "\n".join(parts) if parts else "Информация о пользователе недоступна"


def build_greeting_prompt(user: UserInfo) -> str:
    """Build the LLM prompt for a personalized New Year greeting."""
    return f"""Ты - Максим, весёлый и душевный человек. Напиши искреннее и тёплое поздравление с Новым Годом для человека с этой информацией:

{build_user_description(user)}

Поздравление должно быть:
- На русском языке
- Персонализированным (используй имя если есть)
- Тёплым и искренним
- Не слишком длинным (2-4 предложения)
- Заканчиваться пожеланиями на новый год
- Подписано "С любовью, Максим"

Напиши только само поздравление, без дополнительных комментариев."""


def fallback_greeting(first_name: str | None) -> str:
    """Greeting used when text generation fails."""
    name = first_name or DEFAULT_NAME
    return f"""Дорогой {name}!

Поздравляю тебя с Новым Годом! Пусть этот год принесёт тебе много радости, счастья и исполнения всех желаний. Пусть каждый день будет наполнен теплом и любовью!

С любовью, Максим"""


def build_image_prompt(user: UserInfo) -> str:
    """Build the prompt for the kitschy "Pole Chudes" greeting card."""
    name = user.first_name or DEFAULT_NAME

    return f"""Create a MAXIMUM CRINGE New Year greeting card in the style of Russian TV show "Pole Chudes" (Field of Miracles):

The card should include:
- Cheesy, kitschy Soviet/Russian aesthetic
- Bright garish colors (gold, red, green)
- Badly photoshopped elements
- A jar of pickles or pickled vegetables somewhere
- Sparkles, snowflakes, champagne glasses
- A banner saying "С Новым Годом, {name}!"
- Maybe a badly drawn Santa (Ded Moroz) or Snegurochka
- Tacky gold frames and ornaments
- The overall vibe of a homemade greeting card from a village grandma

Make it as kitschy and cringe as possible, like something a contestant on Pole Chudes would bring as a gift to Yakubovich.

Style: cheesy greeting card, kitsch, tacky, over-the-top decorations, Russian New Year aesthetic"""


def build_song_prompt(user: UserInfo, style: str) -> SongPrompt:
    """Build lyrics, style and title for the personal song.

    Args:
        user: Telegram user information.
        style: Musical style description.

    Returns:
        SongPrompt with Russian pop lyrics personalized with the first name.
    """
    name = user.first_name or DEFAULT_NAME

    lyrics = f"""[Verse 1]
С Новым Годом, {name}!
Пусть сбываются мечты
Счастье, радость, вдохновенье
И любви полны цветы

[Chorus]
Новый Год стучится в двери
Волшебство уже вокруг
{name}, я тебе желаю
Быть счастливым, милый друг

[Verse 2]
Пусть удача не оставит
Каждый день твоих дорог
Максим шлёт тебе приветы
И желает только добра

[Outro]
С Новым Годом! С Новым счастьем!
От Максима с теплотой"""

    return SongPrompt(
        lyrics=lyrics,
        style=style,
        title=f"Новогоднее поздравление для {name}",
    )
