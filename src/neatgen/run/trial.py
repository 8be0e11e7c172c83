"""
NEAT Trial Module

This module defines the abstract base class for NEAT trials with built-in
support for CPU-based parallelization of fitness evaluation using joblib.

A trial represents one independent run of the NEAT algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached.
"""

from abc        import ABC, abstractmethod
from joblib     import Parallel, delayed
from statistics import mean
from typing     import Sequence, TYPE_CHECKING

from neatgen.genotype.innovation_tracker import InnovationTracker
from neatgen.pool.population             import Population
from neatgen.random_source               import RandomSource
from neatgen.run.config                  import Config
if TYPE_CHECKING:
    from neatgen.genotype import GeneticOperators, Organism

class Trial(ABC):
    """
    Abstract base class for implementing a NEAT trial.

    A trial owns everything one run needs: the configuration, the genome
    operators, the ID source and the random source. Reseeding the random
    source from 'config.seed' at the start of every run makes seeded runs
    reproducible.

    Subclasses must implement:
    - _evaluate_fitness(organism): Evaluate fitness for a single organism
    - _report_progress(): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _reset(): Reset trial-specific state (must call super()._reset())
    - _terminate(): Custom termination logic (default: max generations + fitness threshold)

    Public Methods:
        run(): Execute a complete NEAT trial

    Parallelization of fitness evaluation for organisms:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, operators: 'GeneticOperators', suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            operators:       Genome collaborators (construction, mutation, crossover, distance)
            suppress_output: If True, suppress progress and final reports
        """
        self._config            : Config              = config
        self._operators         : 'GeneticOperators'  = operators
        self._generation_counter: int                 = 0
        self._population        : Population | None   = None
        self._tracker           : InnovationTracker   = InnovationTracker()
        self._rng               : RandomSource        = RandomSource(config.seed)
        self._suppress_output   : bool                = suppress_output
        self.failed             : bool                = True

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation of organisms
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population
        self._population = Population.initial(self._config, self._operators, self._tracker, self._rng)

        # Evaluate the fitness of the initial population
        self._evaluate_fitness_all(num_jobs)

        # Display progress for the initial population
        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            # The current generation is replaced by its offspring
            self._population = self._population.advance(self._tracker, self._rng)

            # Evaluate the fitness of each organism in the new generation
            self._evaluate_fitness_all(num_jobs)

            # Display progress after each generation
            if not self._suppress_output:
                self._report_progress()

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses overriding this should call super()._reset() and then
        initialize their problem-specific data.
        """
        self._tracker = InnovationTracker()
        self._rng.reseed(self._config.seed)
        self._generation_counter = 0
        self._population = None
        self.failed = True

    @abstractmethod
    def _evaluate_fitness(self, organism: 'Organism') -> float | Sequence[float]:
        """
        Evaluate and return the fitness of an organism.

        Higher fitness values indicate better performance and higher
        probability of procreating. A sequence may be returned to report
        auxiliary objectives; its first element is the primary fitness.

        IMPORTANT: The primary fitness must be a positive number (or zero).

        Parameters:
            organism: The Organism to evaluate
        """
        pass

    def _evaluate_fitness_all(self, num_jobs: int):
        """
        Evaluate fitness for all organisms in the population.

        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation
        """
        organisms = self._population.organisms()
        serialize = num_jobs == 1

        if serialize:
            for organism in organisms:
                organism.set_fitness(self._evaluate_fitness(organism))
        else:
            fitness_all = Parallel(num_jobs)(delayed(self._evaluate_fitness)(o) for o in organisms)
            for organism, fitness in zip(organisms, fitness_all):
                organism.set_fitness(fitness)

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is called after evaluating each generation and can be used to
        log statistics or display progress information (e.g., generation number,
        best fitness, species count, mean population complexity).

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if a given measure of
        population fitness has reached a given threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            organism_fitness = [org.primary_fitness for org in self._population.organisms()]

            if self._config.fitness_criterion == "max":
                overall_fitness = max(organism_fitness)
            elif self._config.fitness_criterion == "mean":
                overall_fitness = mean(organism_fitness)
            else:
                raise RuntimeError("bad 'fitness_criterion' in configuration file")

            # Compare a measure of population fitness (max, mean) against a threshold
            success = overall_fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
