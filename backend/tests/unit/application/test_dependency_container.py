"""
Unit tests for the dependency injection container.
"""

import pytest

from quickscan.application import DependencyContainer, DependencyNotFoundError


class Repository:
    pass


class Service:
    pass


class TestDependencyContainer:
    def test_singleton_is_shared(self):
        container = DependencyContainer()
        repo = Repository()
        container.register_singleton(Repository, repo)

        assert container.resolve(Repository) is repo
        assert container.resolve(Repository) is repo

    def test_factory_builds_each_time(self):
        container = DependencyContainer()
        container.register_factory(Service, Service)

        assert container.resolve(Service) is not container.resolve(Service)

    def test_factory_may_resolve_other_types(self):
        container = DependencyContainer()
        repo = Repository()
        container.register_singleton(Repository, repo)
        container.register_factory(Service, lambda: (container.resolve(Repository), Service()))

        resolved_repo, _ = container.resolve(Service)

        assert resolved_repo is repo

    def test_override_wins_until_cleared(self):
        container = DependencyContainer()
        real, fake = Repository(), Repository()
        container.register_singleton(Repository, real)

        container.override(Repository, fake)
        assert container.resolve(Repository) is fake

        container.clear_overrides()
        assert container.resolve(Repository) is real

    def test_unregistered_type(self):
        container = DependencyContainer()

        assert not container.is_registered(Service)
        with pytest.raises(DependencyNotFoundError, match="Service"):
            container.resolve(Service)

    def test_len_counts_registrations(self):
        container = DependencyContainer()
        container.register_singleton(Repository, Repository())
        container.register_factory(Service, Service)

        assert len(container) == 2
        assert container.is_registered(Repository)
