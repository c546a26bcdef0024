"""Telegram bot implementation package.

Contains all Telegram bot specific functionality including command handlers,
the outbound channel wrapper, the streaming edit throttle, greeting
orchestration and localized message templates.
"""
