"""
Hero editor example.

A hero detail panel is opened and closed repeatedly while the user browses
heroes. Unsaved form edits survive closing the panel, and each project
(branch) keeps its own drafts.

Run with: python examples/hero_editor.py
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from statefuld import (
    RegistryConfig,
    TrackingConfig,
    lifecycle,
    reset_default_registry,
    statefuld,
)

logger = logging.getLogger(__name__)


@dataclass
class Hero:
    id: str
    name: str
    bio: str = ""
    home_city: Optional[str] = None


@dataclass
class HeroForm:
    """Form model backing the detail panel (differential view of a Hero)."""
    hero_id: str
    name: Optional[str] = None
    bio: Optional[str] = None
    home_city: Optional[str] = None
    dirty: Dict[str, bool] = field(default_factory=dict)


@statefuld(TrackingConfig(props=['form', 'active_tab'], key_prop='hero_id'))
class HeroDetailPanel:
    def __init__(self, hero: Hero):
        self.hero_id = hero.id
        self.form = HeroForm(hero_id=hero.id, name=hero.name, bio=hero.bio)
        self.active_tab = 'overview'

    def on_init(self):
        logger.info(f"Panel for {self.hero_id} opened on tab {self.active_tab!r}, name={self.form.name!r}")

    def on_destroy(self):
        logger.info(f"Panel for {self.hero_id} closed")


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    registry = reset_default_registry(RegistryConfig())

    ada = Hero(id='h1', name='Ada')

    with lifecycle(HeroDetailPanel(ada)) as panel:
        panel.form.name = 'Ada Lovelace'
        panel.active_tab = 'deeds'

    # Reopened: draft and tab come back
    with lifecycle(HeroDetailPanel(ada)) as panel:
        assert panel.form.name == 'Ada Lovelace'

    # Another project starts blank
    registry.switch('project-b')
    with lifecycle(HeroDetailPanel(ada)) as panel:
        assert panel.active_tab == 'overview'

    logger.info(f"Store: {registry.to_dict()}")


if __name__ == "__main__":
    main()
