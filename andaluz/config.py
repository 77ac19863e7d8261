"""
Configuration management for the N-Queens backtracking solver.

This module provides a clean interface for loading and validating
configuration from YAML files.
"""

import yaml
from dataclasses import dataclass, field
from typing import Dict, List

from .heuristics import get_heuristic_names


@dataclass
class Config:
    """
    Configuration container for the backtracking solver.

    Attributes:
        sizes: List of board sizes to solve
        max_jumps: Search budget per solve
        heuristics: Heuristic name -> weight (weight 0 disables it)
        log_interval: Jumps between progress lines (0 disables them)
        verbose: Whether to print solver banners
        show: Whether to show plots
        save: Whether to save board figures
        output_dir: Directory to save figures
    """

    # Board configuration
    sizes: List[int] = field(default_factory=lambda: [8])

    # Solver configuration
    max_jumps: int = 100000
    heuristics: Dict[str, float] = field(
        default_factory=lambda: {'horse': 1.0, 'prioritizecenter': 1.0}
    )
    log_interval: int = 0
    verbose: bool = False

    # Visualization and output
    show: bool = False
    save: bool = False
    output_dir: str = 'results'

    @classmethod
    def from_yaml(cls, path: str) -> 'Config':
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """
        Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        # Accept a single 'size' as well as a 'sizes' list
        sizes = data.get('sizes')
        if sizes is None:
            size = data.get('size')
            sizes = [size] if size is not None else [8]
        if not isinstance(sizes, list):
            sizes = [sizes]

        heuristics = data.get('heuristics')
        if heuristics is None:
            heuristics = {'horse': 1.0, 'prioritizecenter': 1.0}

        return cls(
            sizes=sizes,
            max_jumps=data.get('max_jumps', 100000),
            heuristics={str(k).lower(): float(v) for k, v in heuristics.items()},
            log_interval=data.get('log_interval', 0),
            verbose=data.get('verbose', False),
            show=data.get('show', False),
            save=data.get('save', False),
            output_dir=data.get('output_dir', 'results'),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'sizes': self.sizes,
            'max_jumps': self.max_jumps,
            'heuristics': dict(self.heuristics),
            'log_interval': self.log_interval,
            'verbose': self.verbose,
            'show': self.show,
            'save': self.save,
            'output_dir': self.output_dir,
        }

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate sizes
        if not self.sizes:
            errors.append("At least one board size must be specified")
        for size in self.sizes:
            if not isinstance(size, int) or isinstance(size, bool) or size < 1:
                errors.append(f"Board size must be a positive integer, got {size}")

        # Validate budget
        if self.max_jumps < 0:
            errors.append(f"max_jumps must be non-negative, got {self.max_jumps}")
        if self.log_interval < 0:
            errors.append(f"log_interval must be non-negative, got {self.log_interval}")

        # Validate heuristics
        valid_heuristics = get_heuristic_names()
        for name, weight in self.heuristics.items():
            if name not in valid_heuristics:
                errors.append(f"Invalid heuristic '{name}', must be one of {valid_heuristics}")
            if weight < 0:
                errors.append(f"Heuristic weight for '{name}' must be non-negative, got {weight}")

        return errors

    def print_summary(self) -> None:
        """Print configuration summary."""
        print("=" * 60)
        print("Configuration Summary")
        print("=" * 60)
        print(f"Board sizes: {self.sizes}")
        print(f"Max jumps: {self.max_jumps:,}")
        weights = ', '.join(f"{name}={weight}" for name, weight in self.heuristics.items())
        print(f"Heuristics: {weights or 'none (BruteForce fallback)'}")
        if self.log_interval > 0:
            print(f"Log interval: {self.log_interval:,}")
        print(f"Save: {self.save}" + (f" → {self.output_dir}" if self.save else ""))
        print("=" * 60)
