import streamlit as st
import pandas as pd

from sb import Driver
from sb.alphabet import ALPHABETS, get_alphabet
from sb.errors import BreederError
from sb.report import FitnessHistory, fitness_histogram, population_frame

import logging
import time

from dotenv import load_dotenv

load_dotenv() # load environment variables

logging.basicConfig(format='%(asctime)s - %(levelname)s - %(message)s', level=logging.INFO)
logger = logging.getLogger(__name__)

st.set_page_config(layout="wide")

# Init state
if 'driver' not in st.session_state:
    st.session_state['driver'] = None

if 'history' not in st.session_state:
    st.session_state['history'] = FitnessHistory()

if 'running' not in st.session_state:
    st.session_state['running'] = False

st.title('StringBreeder')
st.markdown("""A population of random strings evolves toward a target string. Each generation, every individual is
scored by the fraction of characters it shares with the target, and copied into a mating pool
ceil(fitness * mating pool factor) times. Children are bred from two different parents drawn from the pool,
each character taken from one parent or the other at random, then mutated character by character.
""")

target = st.text_input("target", value="hello world", key="target")

col1, col2, col3 = st.columns(3)
with col1:
    population_size = st.number_input("population size", min_value=2, value=200)
    alphabet = st.selectbox("alphabet", sorted(ALPHABETS), index=sorted(ALPHABETS).index('printable'))
with col2:
    mating_pool_factor = st.number_input("mating pool factor", min_value=1, value=200)
    generations = st.number_input("number of generations to run for", min_value=1, value=100)
with col3:
    mutation_rate = st.number_input("mutation rate", min_value=0.0, max_value=1.0, value=0.01, step=0.005, format="%.3f")
    seed = st.number_input("seed (0 for a random run)", min_value=0, value=0)

run_button = st.button(f"run for {generations} generations")
if run_button:
    try:
        st.session_state.driver = Driver(
            target=target,
            population_size=int(population_size),
            mating_pool_factor=int(mating_pool_factor),
            mutation_rate=float(mutation_rate),
            alphabet=get_alphabet(alphabet),
            seed=int(seed) or None,
        )
    except BreederError as e:
        st.error(str(e))
        st.stop()

    st.session_state.history = FitnessHistory()
    st.session_state.history.record(st.session_state.driver.state)
    st.session_state.running = True
    start_time = time.time()

    outputs = st.container()
    with outputs:
        best_header = st.empty()
        pop_hist_header = st.empty()
        fit_hist = st.empty()
        col1, col2 = st.columns(2)
        with col1:
            st.header("Historical fitness average")
            fit_line = st.empty()
        with col2:
            st.header("Historical best fitness")
            best_line = st.empty()
        current_pop_header = st.empty()
        population_table = st.empty()

        driver = st.session_state.driver
        for _ in range(int(generations)):
            try:
                driver.advance()
            except BreederError as e:
                st.error(f"stopped at generation {driver.state.generation}: {e}")
                break
            st.session_state.history.record(driver.state)

            summary = driver.summary()
            history = st.session_state.history.frame()
            best_header.header(f"Current top phrase: {summary.best_individual}")
            pop_hist_header.header(f"Generation {driver.state.generation} Histogram")
            fit_hist.bar_chart(data=pd.Series(fitness_histogram(driver.state), name="individuals"))
            fit_line.line_chart(data=history['average'])
            best_line.line_chart(data=history['best'])
            current_pop_header.header(f"Generation {driver.state.generation}")
            population_table.dataframe(population_frame(driver.state))

    logger.info(f"Ran {len(st.session_state.history) - 1} generations. {time.time() - start_time}s")
    st.session_state.running = False

with st.sidebar:
    st.title("Population Information")
    st.header("target")
    st.text(target)
    st.metric("Population Size", int(population_size))
    st.metric("Mating pool factor", int(mating_pool_factor))
    st.metric("Mutation rate", f"{mutation_rate:.1%}")
    st.title("Current Information")
    driver = st.session_state.driver
    if driver is not None:
        summary = driver.summary()
        st.metric("Current generation", str(summary.generation))
        st.metric("Average fitness", f"{summary.average_fitness:.3f}")
        st.subheader("Top individuals")
        st.table({'individual': summary.top_k})
