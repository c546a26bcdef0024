"""External generation services package.

Contains clients for the text, image and song generation APIs together with
the prompt builders they share.
"""
