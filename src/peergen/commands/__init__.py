"""Built-in CLI sub-commands for peergen.

* :mod:`~peergen.commands.build` -- ``init`` and ``sync``, the two entry
  points of the peer pipeline.
* :mod:`~peergen.commands.plan` -- read-only listing of planned peers.
* :mod:`~peergen.commands.config` -- view and modify global settings.

Single commands are plain callback functions registered on the root app;
the ``config`` group is a :class:`typer.Typer` sub-application.
"""
