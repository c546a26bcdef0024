"""New Year Greeting Bot Package.

A Telegram bot that writes a personalized New Year greeting with an LLM and
streams it into the chat by editing a single message, then follows up with a
kitschy greeting card image and a short personal song.

The application follows a modular architecture with separate concerns for:
- Bot handlers, the outbound Telegram channel and request orchestration
- Throttled streaming of partial generations into message edits
- External generation services (OpenRouter text/image, Suno songs)
"""
