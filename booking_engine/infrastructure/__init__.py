"""
Capa de infraestructura: adaptadores concretos de los puertos de aplicación.

- in_memory: repositorios y pasarelas en memoria (desarrollo y tests)
- db: tablas SQLAlchemy Core y repositorios async
- gateways: Stripe Checkout y cliente HTTP de la API de reservas
- services: generadores de identificadores y lanzador de checkout
"""
