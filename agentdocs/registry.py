"""Built-in registry of library documentation presets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class RegistryEntry:
    """Where a library keeps its docs and how its release tags are named.

    ``tag_prefix`` is prepended to a detected package version to form a git tag
    (``"v"`` turns ``15.0.0`` into ``v15.0.0``). ``None`` means the docs repo has
    no version tags, so the default tag is always used.
    """

    repo: str
    docs_path: str
    default_tag: str
    name: str
    packages: Tuple[str, ...] = ()
    tag_prefix: Optional[str] = None
    extensions: Optional[Tuple[str, ...]] = None


REGISTRY: Dict[str, RegistryEntry] = {
    "nextjs": RegistryEntry("vercel/next.js", "docs", "canary", "Next.js", ("next",), "v"),
    "react": RegistryEntry("reactjs/react.dev", "src/content", "main", "React", ("react",)),
    "vue": RegistryEntry("vuejs/docs", "src", "main", "Vue", ("vue",)),
    "svelte": RegistryEntry(
        "sveltejs/svelte", "documentation/docs", "main", "Svelte", ("svelte",), "svelte@"
    ),
    "astro": RegistryEntry("withastro/docs", "src/content/docs", "main", "Astro", ("astro",)),
    "drizzle": RegistryEntry(
        "drizzle-team/drizzle-orm-docs", "src/content", "main", "Drizzle ORM", ("drizzle-orm",)
    ),
    "hono": RegistryEntry("honojs/hono", "docs", "main", "Hono", ("hono",), "v"),
    "nestjs": RegistryEntry(
        "nestjs/docs.nestjs.com", "content", "master", "NestJS", ("@nestjs/core",)
    ),
    "angular": RegistryEntry(
        "angular/angular", "adev/src/content", "main", "Angular", ("@angular/core",), ""
    ),
    "nuxt": RegistryEntry("nuxt/nuxt", "docs", "main", "Nuxt", ("nuxt",), "v"),
    "react-router": RegistryEntry(
        "remix-run/react-router", "docs", "main", "React Router", ("react-router",), "react-router@"
    ),
    "express": RegistryEntry("expressjs/expressjs.com", "en", "gh-pages", "Express", ("express",)),
    "fastify": RegistryEntry("fastify/fastify", "docs", "main", "Fastify", ("fastify",), "v"),
    "prisma": RegistryEntry("prisma/docs", "content", "main", "Prisma", ("prisma",)),
    "tanstack-query": RegistryEntry(
        "TanStack/query", "docs", "main", "TanStack Query", ("@tanstack/react-query",), "v"
    ),
    "vite": RegistryEntry("vitejs/vite", "docs", "main", "Vite", ("vite",), "v"),
    "tailwindcss": RegistryEntry(
        "tailwindlabs/tailwindcss.com", "src/docs", "main", "Tailwind CSS", ("tailwindcss",)
    ),
    "trpc": RegistryEntry("trpc/trpc", "www/docs", "main", "tRPC", ("@trpc/server",)),
    "bun": RegistryEntry("oven-sh/bun", "docs", "main", "Bun", ("bun-types",), "bun-v"),
    "zustand": RegistryEntry("pmndrs/zustand", "docs", "main", "Zustand", ("zustand",), "v"),
    "convex": RegistryEntry(
        "get-convex/convex-backend", "npm-packages/docs/docs", "main", "Convex", ("convex",)
    ),
}


@dataclass
class Registry:
    """Preset lookup over the built-ins plus any configured extra presets."""

    entries: Dict[str, RegistryEntry] = field(default_factory=lambda: dict(REGISTRY))

    @classmethod
    def with_overrides(cls, extra: Mapping[str, RegistryEntry]) -> "Registry":
        merged = dict(REGISTRY)
        merged.update({key.lower(): entry for key, entry in extra.items()})
        return cls(entries=merged)

    def get(self, key: str) -> Optional[RegistryEntry]:
        return self.entries.get(key.lower())

    def keys(self) -> List[str]:
        return sorted(self.entries)

    def items(self) -> List[Tuple[str, RegistryEntry]]:
        """Return ``(key, entry)`` pairs sorted by key."""
        return sorted(self.entries.items(), key=lambda item: item[0])

    def get_by_repo(self, repo: str) -> Optional[RegistryEntry]:
        lowered = repo.lower()
        for entry in self.entries.values():
            if entry.repo.lower() == lowered:
                return entry
        return None


def get_registry_entry(key: str) -> Optional[RegistryEntry]:
    """Return the built-in preset for ``key`` (case-insensitive), or None."""
    return REGISTRY.get(key.lower())


def list_registry_keys() -> List[str]:
    return sorted(REGISTRY)


def get_registry_entry_by_repo(repo: str) -> Optional[RegistryEntry]:
    return Registry().get_by_repo(repo)


__all__ = [
    "REGISTRY",
    "Registry",
    "RegistryEntry",
    "get_registry_entry",
    "get_registry_entry_by_repo",
    "list_registry_keys",
]
