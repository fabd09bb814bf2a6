"""Teşvik Portal.

This package contains the backend of an investment-incentive portal: the
service behind a public single-page application that lets investors search
support programs, estimate incentive amounts, look up NACE sector eligibility
and ask questions to an AI assistant grounded on official Q&A documents.

High-level architecture
-----------------------

The codebase is organized around a thin HTTP layer on top of small,
independently testable domain modules:

- **Domain modules** are plain Python: formulas, lookups, ranking and text
  post-processing. They never touch HTTP and only see data passed to them.
- **Integration modules** talk to third-party services (embeddings, LLM,
  geolocation, e-mail, exchange-rate feed) through thin async clients.

Core subpackages
----------------

- ``tesvik_portal.incentives``: region table, admin-configurable parameters,
  the incentive calculator, special-case checks and NACE lookup.
- ``tesvik_portal.search``: hybrid (keyword + semantic) support-program search
  and program embedding maintenance.
- ``tesvik_portal.rag``: knowledge-base chunking, retrieval and the chat
  pipeline.
- ``tesvik_portal.clients``: HTTP clients for OpenAI embeddings, the LLM answer
  generator, TCMB exchange rates, IP geolocation and transactional e-mail.
- ``tesvik_portal.core``: logging, monitoring, errors and the database layer.
- ``tesvik_portal.server``: the FastAPI application, configuration and routers.
"""
