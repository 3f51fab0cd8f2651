from topicctl.keys import same_elements, shuffled_keys, sorted_keys, sorted_keys_by_value


def test_sorted_keys():
    assert sorted_keys({3: 1, 1: 2, 2: 0}) == [1, 2, 3]
    assert sorted_keys({}) == []


def test_shuffled_keys_is_permutation():
    mapping = {key: key * 2 for key in range(20)}
    result = shuffled_keys(mapping, "topic-a")
    assert sorted(result) == sorted_keys(mapping)


def test_shuffled_keys_is_repeatable():
    mapping = {key: 0 for key in range(15)}
    assert shuffled_keys(mapping, "seed") == shuffled_keys(dict(mapping), "seed")


def test_shuffled_keys_empty():
    assert shuffled_keys({}, "anything") == []


def test_sorted_keys_by_value_ascending_pinned():
    assert sorted_keys_by_value({1: 5, 2: 3, 3: 5, 4: 1}, True, sorted_keys) == [4, 2, 1, 3]


def test_sorted_keys_by_value_ascending_invariant():
    mapping = {5: 9, 2: 1, 7: 4, 1: 4, 3: 0}
    result = sorted_keys_by_value(mapping, True, sorted_keys)
    values = [mapping[key] for key in result]
    assert values == sorted(values)
    assert sorted(result) == sorted(mapping)


def test_sorted_keys_by_value_descending_invariant():
    mapping = {5: 9, 2: 1, 7: 4, 1: 4, 3: 0}
    result = sorted_keys_by_value(mapping, False, sorted_keys)
    values = [mapping[key] for key in result]
    assert values == sorted(values, reverse=True)
    assert sorted(result) == sorted(mapping)


def test_sorted_keys_by_value_ties_follow_key_sorter():
    mapping = {1: 7, 2: 7, 3: 7, 4: 7}

    def descending(m):
        return sorted(m, reverse=True)

    assert sorted_keys_by_value(mapping, True, descending) == descending(mapping)
    assert sorted_keys_by_value(mapping, False, descending) == descending(mapping)


def test_sorted_keys_by_value_with_shuffled_sorter():
    mapping = {key: key % 3 for key in range(12)}
    result = sorted_keys_by_value(mapping, True, lambda m: shuffled_keys(m, "x"))
    values = [mapping[key] for key in result]
    assert values == sorted(values)


def test_same_elements():
    assert same_elements([1, 2, 2], [2, 1, 2]) is True
    assert same_elements([], []) is True
    assert same_elements([1, 2], [1, 2, 2]) is False
    assert same_elements([1, 1, 2], [1, 2, 2]) is False