import random


def fifty_fifty(keys, correct_key, rng=random):
    """Keep the correct key and one random wrong key."""
    wrong = [k for k in keys if k != correct_key]
    return sorted([correct_key, rng.choice(wrong)])


def audience_distribution(keys, correct_key, rng=random):
    """Percent of the audience voting for each key, leaning toward the correct one.

    Weights are drawn so the correct key always outweighs the others, then
    scaled to integers summing to exactly 100 (largest remainder first).
    """
    weights = {k: rng.randint(5, 30) for k in keys}
    weights[correct_key] = rng.randint(45, 85)
    total = sum(weights.values())

    raw = {k: w * 100 / total for k, w in weights.items()}
    result = {k: int(v) for k, v in raw.items()}
    leftover = 100 - sum(result.values())
    for k in sorted(keys, key=lambda k: raw[k] - result[k], reverse=True)[:leftover]:
        result[k] += 1
    return result


def friend_call(keys, correct_key, accuracy=80, rng=random):
    if rng.randint(1, 100) <= accuracy:
        key = correct_key
    else:
        key = rng.choice([k for k in keys if k != correct_key])
    return f'Your friend thinks the answer is {key.upper()}'
