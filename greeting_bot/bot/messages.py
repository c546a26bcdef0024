"""Telegram bot message templates and constants.

Contains all user-facing message templates in Russian, status texts for the
greeting, card and song flows, and error notices. Centralizes message
management for easy localization and a consistent user experience.
"""

# Bot commands and descriptions
START_MESSAGE = (
    "Привет{name_part}!\n\n"
    "Я бот Максима, и я создан специально для того, чтобы поздравить тебя с Новым Годом!\n\n"
    "Нажми /greeting или просто напиши что-нибудь, чтобы получить своё "
    "персональное поздравление от Максима."
)

# Greeting flow
GREETING_PLACEHOLDER = "✨ Генерирую поздравление..."
GREETING_ERROR = "Извини, произошла ошибка. Попробуй ещё раз через минутку!"

# Greeting card flow
CARD_STATUS = "🎨 Рисую кринжовую открытку в стиле Поля Чудес..."
CARD_CAPTION = "🎄 Кринжовая открытка от Максима из деревни Нижние Пупки!"
CARD_FAILED = "😔 Не удалось нарисовать открытку, но стихи уже у тебя!"

# Song flow
SONG_STATUS = "🎵 А теперь готовлю для тебя персональную песню...\n\nЭто займёт пару минут, подожди!"
SONG_STATUS_TEXTS = {
    "starting": "🎵 Начинаю создание песни...",
    "generating": "🎤 Генерирую музыку и вокал...\n\nЭто займёт 1-2 минуты.",
    "almost_done": "🎧 Почти готово! Финальная обработка...",
}
SONG_READY = "🎵 Песня готова! Отправляю..."
SONG_PERFORMER = "Максим (AI)"
SONG_CAPTION = "🎄 {title}\n\nС Новым Годом! 🎉"
SONG_FAILED = "😔 К сожалению, не удалось создать песню. Но текстовое поздравление уже у тебя!"
SONG_ERROR = "😔 Не удалось создать песню, но поздравление уже отправлено!"


def format_start_message(first_name: str | None) -> str:
    """Build the /start welcome text.

    Args:
        first_name: User's first name, omitted from the greeting when empty.

    Returns:
        Welcome message text.
    """
    name_part = f", {first_name}" if first_name else ""
    return START_MESSAGE.format(name_part=name_part)
