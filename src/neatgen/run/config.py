import configparser
import os

from neatgen.pool.species import FITNESS_SHARING

class Config:

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with default values, for testing/manual setup.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size   = 150
            self.weight_init_mean  = 0.0
            self.weight_init_stdev = 1.0
            self.seed              = None

            self.compatibility_threshold = 3.0

            self.elite_count              = 1
            self.survival_percent         = 0.2
            self.crossover_rate           = 0.75
            self.interspecies_mating_rate = 0.001
            self.fitness_sharing          = 'shared'

            self.age_to_stagnation = 15

            self.fitness_termination_check = False
            self.fitness_criterion         = 'max'
            self.fitness_threshold         = None
            self.max_number_generations    = 100
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)

                # String options keep "none" verbatim, it can be a valid choice
                if value_type == str:
                    return raw_value
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of organisms in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)

        # The mean and standard deviation of the normal distribution used to
        # re-randomize the connection weights of each clone of the seed genome.
        self.weight_init_mean  = get_value('POPULATION_INIT', 'weight_init_mean' , float, default=0.0)
        self.weight_init_stdev = get_value('POPULATION_INIT', 'weight_init_stdev', float, default=1.0)

        # Seed for the random source. Use "None" to seed from OS entropy.
        self.seed = get_value('POPULATION_INIT', 'seed', int, default=None)

        # [SPECIATION]

        # Organisms whose compatibility distance to a species example
        # is less than this threshold join that species.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float)

        # [REPRODUCTION]

        # The number of most-fit organisms in each species that
        # will be preserved as-is from one generation to the next.
        self.elite_count = get_value('REPRODUCTION', 'elite_count', int)

        # The fraction of each species that survives culling and may reproduce.
        self.survival_percent = get_value('REPRODUCTION', 'survival_percent', float)

        # The probability that an offspring is produced by crossover
        # (followed by mutation) rather than by mutation alone.
        self.crossover_rate = get_value('REPRODUCTION', 'crossover_rate', float)

        # The probability that the second parent of a crossover is drawn from the
        # whole population rather than from the first parent's species. Also the
        # probability that an offspring slot is deferred to the population-wide top-up.
        self.interspecies_mating_rate = get_value('REPRODUCTION', 'interspecies_mating_rate', float)

        # How member fitness is aggregated into species fitness.
        # Allowed values:
        #   "shared" - each member contributes its fitness divided by the species size
        #   "none"   - each member contributes its raw fitness
        self.fitness_sharing = get_value('REPRODUCTION', 'fitness_sharing', str, default='shared')

        # [STAGNATION]

        # Species that have not improved their best fitness for this many
        # generations go extinct (unless they hold the fittest organism).
        self.age_to_stagnation = get_value('STAGNATION', 'age_to_stagnation', int)

        # [TERMINATION]

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)

        # The function used to compute the termination criterion.
        # Allowed values:
        #   "mean" calculate the mean fitness across the entire population
        #   "max"  get the fitness of the fittest organism in the population
        self.fitness_criterion = get_value('TERMINATION', 'fitness_criterion', str, default='max')

        # The fitness value which when met or exceeded causes the run to end.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=None)

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int)

        self.validate()

    def validate(self) -> None:
        """
        Check that every parameter lies in its allowed range.
        Raises ValueError naming the first offending parameter.
        """
        def check(name, ok):
            if not ok:
                raise ValueError(f"Invalid value for '{name}': {getattr(self, name)!r}")

        check('population_size'         , self.population_size > 0)
        check('survival_percent'        , 0.0 <= self.survival_percent <= 1.0)
        check('elite_count'             , self.elite_count >= 0)
        check('age_to_stagnation'       , self.age_to_stagnation >= 0)
        check('crossover_rate'          , 0.0 <= self.crossover_rate <= 1.0)
        check('interspecies_mating_rate', 0.0 <= self.interspecies_mating_rate <= 1.0)
        check('compatibility_threshold' , self.compatibility_threshold >= 0.0)
        check('weight_init_stdev'       , self.weight_init_stdev >= 0.0)
        check('fitness_sharing'         , self.fitness_sharing in FITNESS_SHARING)
        check('fitness_criterion'       , self.fitness_criterion in ('max', 'mean'))
        if self.fitness_termination_check:
            check('fitness_threshold', self.fitness_threshold is not None)
