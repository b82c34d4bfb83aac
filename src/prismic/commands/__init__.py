"""Built-in CLI sub-commands for prismic.

* :mod:`~prismic.commands.content` -- ``info``, ``search`` and ``render``,
  the commands that talk to a repository's API.
* :mod:`~prismic.commands.config` -- view and modify global settings.

``content`` exports plain callback functions registered directly on the root
app; ``config`` exports a :class:`typer.Typer` sub-application.
"""
