# Configuration parameters for the metaheuristic search framework
# Every factory merges a user dict over a copy of the matching dict below.

# Generic run configuration (shared by all metaheuristics)
SEARCH_CONFIG = {
    'max_iterations': 1000,      # Stop after N iterations (None = unbounded)
    'max_time': None,            # Stop after D seconds (None = unbounded)
    'stagnation_limit': 100,     # Stop after N iterations without best improvement
    'seed': None,                # Master seed; per-component seeds are spawned from it
    'record_history': True,      # Keep one IterationRecord per iteration
    'log_interval': 100,         # Progress line every N iterations (0 = off)
    'profile': False,            # Collect per-stage timings
}

# Variable Neighborhood Search
VNS_CONFIG = {
    'neighborhood_count': None,  # k_max; defaults to the number of operators
    'strategy': 'best',          # best | first | random (how a neighborhood is searched)
    'stagnation_limit': None,    # VNS stops on exhaustion, not on stagnation
}

# Simulated Annealing
SA_CONFIG = {
    'initial_temperature': 100.0,
    'cooling': 'geometric',      # geometric | linear
    'cooling_rate': 0.95,        # alpha for geometric, delta for linear
    'min_temperature': 1e-6,     # Floor; the schedule never drops below it
    'strategy': 'random',        # SA draws one random neighbor per iteration
    'selector': 'random',        # sequential | random | adaptive (several operators)
    'adaptive_decay': 0.2,
}

# Tabu Search
TABU_CONFIG = {
    'tabu_tenure': 7,            # Iterations before a move ages out
    'tabu_max_size': None,       # Optional hard capacity (FIFO eviction)
    'aspiration': True,          # Allow tabu moves that beat the global best
    'strategy': 'random',
    'selector': 'random',
    'adaptive_decay': 0.2,
}

# Large Neighborhood Search
LNS_CONFIG = {
    'acceptance': 'improving',   # improving | threshold | annealing
    'threshold': 0.05,           # Used by threshold acceptance
    'threshold_mode': 'relative',  # relative | absolute
    'destroy_selector': 'adaptive',
    'repair_selector': 'random',
    'adaptive_decay': 0.2,
    # Annealing acceptance parameters (acceptance = 'annealing')
    'initial_temperature': 100.0,
    'cooling': 'linear',
    'cooling_rate': 0.05,
    'min_temperature': 1e-6,
}

# Adaptive operator selector scores (improved best / accepted / rejected)
ADAPTIVE_SCORES = {
    'improved_best': 3.0,
    'accepted': 1.0,
    'rejected': 0.0,
}

# Search presets (override SEARCH_CONFIG)
SEARCH_PRESETS = {
    'fast': {
        'max_iterations': 200,
        'max_time': 5.0,
        'stagnation_limit': 50,
        'log_interval': 0,
    },
    'standard': {
        'max_iterations': 1000,
        'max_time': 60.0,
        'stagnation_limit': 100,
        'log_interval': 100,
    },
    'thorough': {
        'max_iterations': 20000,
        'max_time': 600.0,
        'stagnation_limit': 2000,
        'log_interval': 1000,
    },
}

# Visualization Configuration
VIZ_CONFIG = {
    'figure_size': (12, 6),
    'dpi': 150,
    'colors': ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728'],
    'line_width': 2,
    'font_size': 12,
}

# File Paths
PATHS = {
    'results': 'results/',
    'logs': 'logs/',
}
