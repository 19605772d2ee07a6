from .simulation import DEFAULT_CONFIG, SimulationPipeline, create_config, run_replicates

__all__ = ['DEFAULT_CONFIG', 'SimulationPipeline', 'create_config', 'run_replicates']
