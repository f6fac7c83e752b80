"""
Infrastructure Layer - Clean Architecture
Contém implementações concretas de repositórios, providers e a composição do app
"""

from infrastructure.container import AppContainer, build_container, build_city_sync_engine

__all__ = [
    'AppContainer',
    'build_container',
    'build_city_sync_engine'
]
