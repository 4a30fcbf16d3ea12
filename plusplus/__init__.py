"""
PlusPlus — Karma Tracking for Slack Workspaces
===============================================
Watches channel messages for ``<@user>++``, ``:emoji: --`` and ``<@user>==``
style tokens, keeps a running point total per target, and answers with a
flavored reply reporting the new score.

Package layout::

    plusplus/
    ├── config.py          # YAML + env → typed Python config
    ├── errors.py          # Exception hierarchy
    ├── engine/
    │   ├── events.py      # MessageEvent envelope
    │   ├── intent.py      # ++ / -- / == operation detector
    │   └── targets.py     # User / emoji target extraction
    ├── database/
    │   ├── models.py      # SQLAlchemy ``user_points`` model
    │   └── engine.py      # SQLAlchemy engine + async helper
    ├── store/
    │   ├── base.py        # PointStore protocol
    │   ├── sqlite_store.py    # Embedded relational backend
    │   ├── dynamodb_store.py  # Managed key-value backend
    │   └── factory.py     # Backend selection from config
    ├── services/
    │   ├── karma_service.py   # Intent handler
    │   └── messages.py        # Reply templates + flavor text
    ├── data/
    │   └── messages.json  # Reply templates
    └── bot/
        ├── core.py        # Bolt app + message listener
        ├── transport.py   # Slack Web API capabilities
        └── __main__.py    # ``python -m plusplus.bot``
"""

__version__ = "0.1.0"
