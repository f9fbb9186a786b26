"""Built-in CLI sub-commands for tianquote.

* :mod:`~tianquote.commands.quote` -- fetch and print the quotation.
* :mod:`~tianquote.commands.cache` -- locate or clear the cache file.
* :mod:`~tianquote.commands.config` -- view and modify global settings.
"""
