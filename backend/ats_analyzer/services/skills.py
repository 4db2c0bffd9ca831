from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

SKILL_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "backend": (
        "c#", "csharp", ".net", "dotnet", "asp.net", "asp.net core", "net core",
        "java", "spring", "spring boot", "python", "django", "flask", "fastapi",
        "node.js", "nodejs", "express", "nestjs", "php", "laravel", "symfony",
        "ruby", "rails", "go", "golang", "rust",
    ),
    "frontend": (
        "react", "reactjs", "react.js", "angular", "angularjs", "vue", "vue.js", "vuejs",
        "javascript", "typescript", "html", "css", "sass", "scss", "tailwind",
        "next.js", "nextjs", "nuxt", "svelte", "bootstrap", "material-ui", "mui",
    ),
    "database": (
        "sql", "sql server", "mssql", "mysql", "postgresql", "postgres", "oracle",
        "mongodb", "cosmosdb", "dynamodb", "redis", "cassandra", "elasticsearch",
        "sqlite", "mariadb", "firebase",
    ),
    "cloud": (
        "azure", "aws", "gcp", "google cloud", "kubernetes", "k8s", "docker",
        "terraform", "ansible", "jenkins", "github actions", "gitlab ci",
        "azure devops", "cloud computing",
    ),
    "devops": (
        "ci/cd", "devops", "git", "github", "gitlab", "bitbucket",
        "docker", "kubernetes", "jenkins", "terraform", "ansible",
        "prometheus", "grafana", "elk", "nginx", "apache",
    ),
    "architecture": (
        "microservices", "microservicos", "api rest", "rest api", "restful",
        "graphql", "grpc", "soap", "event-driven", "message broker",
        "kafka", "rabbitmq", "azure service bus", "clean architecture",
        "ddd", "domain-driven design", "cqrs", "solid", "design patterns",
    ),
    "testing": (
        "tdd", "bdd", "unit test", "integration test", "xunit", "nunit",
        "jest", "mocha", "pytest", "junit", "selenium", "cypress",
    ),
    "mobile": (
        "react native", "flutter", "xamarin", "ionic", "swift", "kotlin",
        "android", "ios", "mobile",
    ),
    "data": (
        "data science", "machine learning", "ml", "ai", "deep learning",
        "pandas", "numpy", "scikit-learn", "tensorflow", "pytorch",
        "power bi", "tableau", "data analytics", "etl",
    ),
}

# family markers (substring of a detected skill) -> bundle to recommend
DOTNET_MARKERS = ("c#", ".net", "csharp")
DOTNET_BUNDLE = ("azure", "docker", "kubernetes", "microservices", "clean architecture")
REACT_MARKERS = ("react",)
REACT_BUNDLE = ("next.js", "typescript", "graphql", "tailwind")
BACKEND_BUNDLE = ("docker", "kubernetes", "ci/cd", "microservices")

MAX_RECOMMENDED = 5


def skills_considered_equivalent(a: str, b: str) -> bool:
    """
    Loose skill equivalence over normalized strings: either one contains the
    other, so "sql" and "sql server" match. Every skill comparison between a
    résumé and a job goes through here.
    """
    return a in b or b in a


def _unique_keep_order(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


class SkillsCatalog:
    """Read-only category -> skill tokens table."""

    def __init__(self, categories: Mapping[str, Sequence[str]]):
        self._categories = MappingProxyType(
            {name.lower(): tuple(skills) for name, skills in categories.items()}
        )
        self._all = tuple(_unique_keep_order(s for skills in self._categories.values() for s in skills))

    def all_skills(self) -> Tuple[str, ...]:
        return self._all

    def skills_in_category(self, category: str) -> Tuple[str, ...]:
        return self._categories.get((category or "").lower(), ())

    def recommend(self, current_skills: Iterable[str]) -> List[str]:
        current = list(current_skills)
        backend = self.skills_in_category("backend")

        recommended: List[str] = []
        if any(m in s for s in current for m in DOTNET_MARKERS):
            recommended.extend(DOTNET_BUNDLE)
        if any(m in s for s in current for m in REACT_MARKERS):
            recommended.extend(REACT_BUNDLE)
        if any(s in backend for s in current):
            recommended.extend(BACKEND_BUNDLE)

        present = set(current)
        return [r for r in _unique_keep_order(recommended) if r not in present][:MAX_RECOMMENDED]


DEFAULT_CATALOG = SkillsCatalog(SKILL_CATEGORIES)
