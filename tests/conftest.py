"""Pytest configuration and fixtures."""

import pytest

from nexus_fetch.models import Gav, NexusInstance, NexusRepository

BASE_URL = "http://nexus.test:8081/nexus/"

SEARCH_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<searchNGResponse>
  <totalCount>2</totalCount>
  <from>-1</from>
  <count>-1</count>
  <tooManyResults>false</tooManyResults>
  <collapsed>false</collapsed>
  <repoDetails/>
  <data>
    <artifact>
      <groupId>com.example</groupId>
      <artifactId>app</artifactId>
      <version>1.0</version>
      <latestRelease>1.0</latestRelease>
      <artifactHits>
        <artifactHit>
          <repositoryId>releases</repositoryId>
          <artifactLinks>
            <artifactLink>
              <extension>pom</extension>
            </artifactLink>
            <artifactLink>
              <extension>jar</extension>
            </artifactLink>
            <artifactLink>
              <classifier>sources</classifier>
              <extension>jar</extension>
            </artifactLink>
          </artifactLinks>
        </artifactHit>
      </artifactHits>
    </artifact>
    <artifact>
      <groupId>com.example</groupId>
      <artifactId>app</artifactId>
      <version>1.1-SNAPSHOT</version>
      <artifactHits>
        <artifactHit>
          <repositoryId>snapshots</repositoryId>
          <artifactLinks>
            <artifactLink>
              <extension>jar</extension>
            </artifactLink>
          </artifactLinks>
        </artifactHit>
      </artifactHits>
    </artifact>
  </data>
</searchNGResponse>
"""

EMPTY_SEARCH_RESPONSE = """<searchNGResponse>
  <totalCount>0</totalCount>
  <from>-1</from>
  <count>-1</count>
  <tooManyResults>false</tooManyResults>
  <data/>
</searchNGResponse>
"""


@pytest.fixture
def instance() -> NexusInstance:
    """Return a Nexus instance without credentials."""
    return NexusInstance(protocol="http", server="nexus.test", port="8081", context_root="nexus/")


@pytest.fixture
def releases(instance: NexusInstance) -> NexusRepository:
    """Return the releases repository of the test instance."""
    return NexusRepository(instance, "releases")


@pytest.fixture
def sample_gav() -> Gav:
    """Return a fully specified coordinate."""
    return Gav(group="com.example", artifact="app", version="1.0")


@pytest.fixture
def search_response_xml() -> str:
    """Return a search response with a release and a snapshot match."""
    return SEARCH_RESPONSE


@pytest.fixture
def empty_search_response_xml() -> str:
    """Return a search response without matches."""
    return EMPTY_SEARCH_RESPONSE
