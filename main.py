from sb import summarize
from sb.app import run
from sb.config import parse_config
from sb.errors import BreederError

import sys
import logging

import pydantic
from dotenv import load_dotenv
from rich import print
from rich.console import Console
from rich.logging import RichHandler

load_dotenv() # load SB_* option defaults from .env

console = Console()
logger = logging.getLogger(__name__)

try:
    config = parse_config()
except pydantic.ValidationError as e:
    print(f"[red]invalid configuration:[/red]\n{e}")
    sys.exit(2)

# records go through the live console
logging.basicConfig(format='%(asctime)s - %(levelname)s - %(message)s', level=config.log_level,
                    handlers=[RichHandler(console=console, show_time=False, show_level=False, show_path=False)])

try:
    state = run(config, console=console)
except BreederError as e:
    logger.error(f'Run stopped: {e}')
    sys.exit(1)

final = summarize(state, config.top)
print("%"*80)
console.print(f"done after {final.generation} generations, best: {final.best_individual!r}, average fitness {final.average_fitness:.4f}", markup=False)
console.print(final.top_k)
