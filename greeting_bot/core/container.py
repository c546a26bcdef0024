"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components. Generator clients are singletons built from the
configuration; the orchestrator is a factory because each request binds it to
the channel of the bot that received the update.
"""

from dependency_injector import containers, providers

from greeting_bot.bot.greeting import GreetingOrchestrator
from greeting_bot.config import config as app_config
from greeting_bot.services.imagegen import ImageGenerator
from greeting_bot.services.openrouter import OpenRouterClient
from greeting_bot.services.suno import SunoClient


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    config = providers.Object(app_config)

    # Services
    text_generator = providers.Singleton(
        OpenRouterClient,
        settings=config.provided.openrouter,
        timeout=config.provided.bot.timeout,
    )
    image_generator = providers.Singleton(
        ImageGenerator,
        settings=config.provided.openrouter,
        timeout=config.provided.bot.timeout,
    )
    song_generator = providers.Singleton(
        SunoClient,
        settings=config.provided.suno,
        timeout=config.provided.bot.timeout,
    )

    # Bot components; ``channel`` is supplied per request
    greeting_orchestrator = providers.Factory(
        GreetingOrchestrator,
        text_generator=text_generator,
        image_generator=image_generator,
        song_generator=song_generator,
        streaming=config.provided.streaming,
    )
