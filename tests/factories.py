from domain.models import GameDesignPattern


def make_game(**kwargs) -> GameDesignPattern:
    defaults = dict(
        gameId="test_game", gameName="Test Game",
        pacing=5, frictionLevel=5, narrativeDensity=5, mechanicalComplexity=5,
        rewardCadence=5, agencyLevel=5, sensoryIntensity=5, timeToFun=10,
        comfortAlignment=5, escapeAlignment=5, masteryAlignment=5,
        chaosAlignment=5, noveltyAlignment=5, storyFlowAlignment=5,
        genres=["Indie"], platforms=["PC"], avgPlaytime=60, difficulty="moderate",
    )
    defaults.update(kwargs)
    return GameDesignPattern.model_validate(defaults)
