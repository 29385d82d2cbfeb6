import logging
from typing import Optional

from rich.console import Console
from rich.live import Live

from sb import Driver
from sb.alphabet import get_alphabet
from sb.config import Config
from sb.keys import KeyPoller, is_quit
from sb.render import render
from sb.types import GenerationState

logger = logging.getLogger(__name__)

def run(config: Config, console: Optional[Console] = None, poller: Optional[KeyPoller] = None) -> GenerationState:
    """ The terminal loop: advance a generation, redraw, then wait one tick for a quit key.

    Stops on 'q' or Esc, on Ctrl-C, or once `config.generations` generations have been bred.
    Errors from the breeder propagate to the caller.

    Returns:
        GenerationState: the last generation bred.
    """
    console = console or Console()
    poller = poller or KeyPoller()
    driver = Driver(
        target=config.target,
        population_size=config.population,
        mating_pool_factor=config.mating_pool_factor,
        mutation_rate=config.mutation_rate,
        alphabet=get_alphabet(config.alphabet),
        seed=config.seed,
    )
    logger.info(f'Evolving toward {config.target!r} with {driver.rng!r}')

    with Live(render(driver.summary(config.top)), console=console, auto_refresh=False) as live, poller:
        try:
            while config.generations is None or driver.state.generation < config.generations:
                driver.advance()
                live.update(render(driver.summary(config.top)), refresh=True)

                if is_quit(poller.poll(config.tick / 1000)):
                    logger.info(f'Quit at generation {driver.state.generation}')
                    break
        except KeyboardInterrupt:
            logger.info(f'Interrupted at generation {driver.state.generation}')

    return driver.state
