# bistrosim

A discrete-event simulation of a restaurant. Groups of one to four guests
arrive at random intervals and either queue for a table or head for the
self-service buffet.

The restaurant has the following layout:

- 4 two-person tables, 14 three-person tables and 4 four-person tables
- 13 waiters and 13 cashiers
- one manager
- a buffet with 20 seats

Table guests go through these steps in order:

1. The manager picks the largest waiting group that fits the largest free
   table, taking the one that has waited longest among equal sizes.
2. The group is seated at the tightest free table, with at most three spare
   seats.
3. A waiter brings drinks.
4. A waiter brings the main course.
5. The group eats.
6. The group pays at a cashier and leaves.

Buffet guests take one buffet seat per person. Then they go straight to the
cashiers.

Fire alarms go off throughout the run, roughly every 4200 time units. Every
group that is sensitive to the alarm leaves at once. It frees whatever buffet
seat, table, queue place, waiter, cashier or manager it held.

## Running

Install the package, then start the simulation:

    pip install .
    bistrosim

Options:

- `--mode {1,2}`: `1` pauses after each timed event until Enter is pressed,
  and `2` runs straight through. When this option is left out, the program
  asks for the mode.
- `--duration`: the simulated time to run for. The default is 500000.
- `--seed`: the seed for group sizes, alarm sensitivity and table-or-buffet
  choice. Without it, each run differs.
- `--output`: the directory for the statistics files. The default is the
  current directory.

Each event is logged to standard output while the simulation runs. At the end
the program prints:

- the number of groups still in the system
- the mean wait for a table
- the mean length of the table queue
- the mean wait for a waiter
- the mean length of the cashier queue

It also writes each collected series to its own text file in the output
directory, one value per line:

- `clients_in_system.txt`
- `time_for_system_clients.txt`
- `average_time_waiting_for_table.txt`
- `average_length_of_queue_to_table.txt`
- `average_time_waiting_for_waiter_service.txt`
- `average_length_queue_to_cashiers.txt`

Service times (arrival interval, buffet, drink, meal, eating, cashier) are
drawn from a generator that is reseeded with the same fixed seed for every
group. Every group therefore gets the same service times. Only group size,
alarm sensitivity and the choice of table or buffet vary between groups.

## Using it from Python

```python
import random

from bistrosim.simulation import Simulation

sim = Simulation(duration=100_000, step_mode=False, rng=random.Random(1))
stats = sim.run()
print(stats.summary())
stats.write("results")
```

`Simulation.run()` can be called only once and returns a `Statistics` object.
`Statistics.summary()` returns a dict. A mean over an empty series is NaN.
`Statistics.write(directory)` creates the directory if needed and returns the
paths it wrote. In step mode, `Simulation.pause` is called after each timed
event. By default it waits for Enter, and you can replace it with any
callable.

The building blocks can also be used on their own:

- `bistrosim.models`: `GroupOfClients`, `Table`, `Waiter`, `Cashier`,
  `Manager`, `Buffet`, `ClientQueue`, `Event` and `EventKind`.
- `bistrosim.restaurant`: `Restaurant`, with `free_cashier_index()`,
  `free_waiter_index()`, `largest_free_table()` and `can_seat()`.
- `bistrosim.services`: the `start_*` and `finish_*` handlers for the buffet,
  cashier, manager, drink, meal and consumption steps.
- `bistrosim.arrivals`: `ClientGenerator`, which creates groups and schedules
  the next arrival.
- `bistrosim.alarm`: `schedule_alarms()` and `sound_alarm()`.

## Tests

    pip install .[test]
    pytest