"""Dependency Injection container - initialized at app startup."""

from app.repositories.baseline import BaselineRepository
from app.services.elasticity import ElasticityEstimator
from app.services.encoding import VisualEncodingMapper
from app.services.projection import ProjectionService
from app.services.scenario import ScenarioService
from app.services.solver import TargetedOutcomeSolver


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, baseline_repo: BaselineRepository | None = None) -> None:
        """Initialize all dependencies. Call once at app startup.

        Pass ``baseline_repo`` to run against another connection (e.g. in memory).
        """
        if self._initialized:
            return

        # Repositories (singletons); writable so live updates can be applied
        self.baseline_repo = baseline_repo or BaselineRepository(read_only=False)

        # Services (with injected repos)
        self.elasticity = ElasticityEstimator(self.baseline_repo)
        self.projection = ProjectionService(self.baseline_repo)
        self.solver = TargetedOutcomeSolver(self.elasticity)
        self.encoder = VisualEncodingMapper()

        self.scenarios = ScenarioService(
            baseline_repo=self.baseline_repo,
            projection=self.projection,
            solver=self.solver,
            encoder=self.encoder,
        )

        self._initialized = True

    def reset(self) -> None:
        """Allow the next ``init`` to rebuild every instance.

        Existing instances stay attached to the container until that ``init``
        replaces them; nothing is closed here.
        """
        self._initialized = False


# Global container instance
container = Container()
