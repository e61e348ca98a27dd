"""Piste Planner - Procedural piste generation and geometry for a ski-grooming game.

A deterministic level pipeline featuring:
- Seeded level generation from a (seed code, rank) pair
- Fair time budgets derived from the groomable area
- Per-row piste geometry with cliffs, service roads and steep zones
- Structural and spatial validation with deterministic retry

Modules:
    core: Foundation (seeded RNG and seed codes, piste shapes, time budget, share params)
    model: Data structures (LevelDescriptor, geometry records, validation issues, catalog)
    generators: Level generation (generator, piste names, validators)
    geometry: Geometry engine (LevelGeometry, cliff and access path builders, lifecycle)
    ui: Level preview chart

Example:
    from piste_planner.generators import LevelGenerator
    from piste_planner.geometry import LevelGeometry
    from piste_planner.model import Rank
"""
