# topicctl

Helpers for managing Kafka topics: validation and comparison of topic config
settings, parsing of interactive command lines, and readable plain-text
tables for consumer groups, partition offsets and tail statistics.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Topic settings

`topicctl.settings.TopicSettings` is a `dict` of Kafka topic config keys to
values (strings, numbers, booleans or lists).

```python
from datetime import timedelta
from topicctl.settings import TopicSettings, ValidationError, from_config_map

settings = TopicSettings({"retention.ms": 5000, "cleanup.policy": "compact"})
settings.validate()                      # raises ValidationError listing every problem
entries = settings.to_config_entries()   # list of ConfigEntry(name, value)
diff_keys, missing_keys = settings.config_map_diffs({"retention.ms": "6000"})
changed = settings.reduce_retention_drop({"retention.ms": "6000"}, timedelta(milliseconds=100))
```

- `validate` rejects unknown keys and values outside what each known key
  accepts; empty values are skipped. `ValidationError.errors` holds each message.
- `to_config_entries(keys)` converts the given keys (all of them when `keys` is
  `None`); a missing key raises `KeyError`.
- `get_value_str(key)` returns one value in its string form.
- `config_map_diffs` returns the keys whose values differ from a cluster config
  map, and the keys set in the cluster but not here.
- `reduce_retention_drop` lowers a retention decrease so that it is no more
  than `step` below the current cluster value, and reports whether it did.
- `value_to_string` and `value_to_int` perform the value conversions;
  `from_config_map` builds settings from a string map.

## Reports

- `topicctl.groups` holds `GroupCoordinator`, `MemberInfo`, `GroupDetails` and
  `MemberPartitionLag`, and renders them with `format_group_coordinators`,
  `format_group_members`, `format_member_partition_counts`,
  `format_member_lags` and `format_partition_offsets`. A missing member in a
  lag table is shown as a red `None` when writing to a terminal.
- `topicctl.messages` holds `Bounds`, `TailPartitionStats` and `TailStats`
  (`TailStats.for_partitions` creates empty stats), rendered with
  `format_bounds`, `format_bound_totals` (an empty string when there are no
  messages) and `format_tail_stats`.
- `topicctl.pretty` holds the shared helpers: `pretty_duration`,
  `pretty_rate`, `truncate_string_suffix`, `truncate_string_middle`,
  `in_terminal` and `render_table`.

## Key ordering

`topicctl.keys` provides `sorted_keys`, `shuffled_keys` (a repeatable
shuffle seeded from a string), `sorted_keys_by_value` and `same_elements`.

## REPL input parsing

`topicctl.command.parse_repl_inputs` splits a line into arguments and
`--flag=value` options, returning a `ReplCommand`. `ReplCommand.check_args`
enforces argument counts and allowed flags, raising `CommandError`
otherwise; `get_bool_value` treats a bare flag as true.

## What this package does not do

It does not connect to Kafka or ZooKeeper, read or write topic YAML files,
model full topic configs, tail messages, or provide a command-line program
or interactive shell. The data it formats and checks must be supplied by
the caller.