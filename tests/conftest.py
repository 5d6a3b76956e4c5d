"""
Shared pytest fixtures for pom-modules tests.
"""

from textwrap import dedent

import pytest

from pom_modules import config as config_module
from pom_modules.config import ConfigManager


AGGREGATOR_POM = dedent("""\
    <?xml version="1.0" encoding="UTF-8"?>
    <project xmlns="http://maven.apache.org/POM/4.0.0"
             xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
             xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 https://maven.apache.org/xsd/maven-4.0.0.xsd">
      <modelVersion>4.0.0</modelVersion>
      <groupId>org.example</groupId>
      <artifactId>parent</artifactId>
      <version>1.0-SNAPSHOT</version>
      <packaging>pom</packaging>
      <!-- submodules -->
      <modules>
        <module>child-a</module>
      </modules>
    </project>
""")


@pytest.fixture
def aggregator_pom(tmp_path):
    pom = tmp_path / "pom.xml"
    pom.write_text(AGGREGATOR_POM, encoding="utf-8")
    return pom


@pytest.fixture
def config_manager(tmp_path, monkeypatch):
    """A config manager rooted in tmp_path, installed as the global one."""
    for var in ("POM_MODULES_ENCODING", "POM_MODULES_SHOW_DIFF", "POM_MODULES_LOG_LEVEL", "POM_MODULES_BACKUP"):
        monkeypatch.delenv(var, raising=False)
    manager = ConfigManager(config_dir=tmp_path / ".pom-modules")
    monkeypatch.setattr(config_module, "_config_manager", manager)
    return manager
