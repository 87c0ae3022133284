import argparse

from hexmetro import config
from hexmetro.engine import Engine


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="hexmetro", description="Hex grid transit line builder.")
    parser.add_argument("config", nargs="?", help="YAML file overriding GameConfig defaults")
    parser.add_argument("--seed", type=int, default=None, help="station layout seed")
    args = parser.parse_args(argv)

    try:
        cfg = config.load_config(args.config)
    except config.ConfigError as e:
        parser.error(str(e))
    if args.seed is not None:
        cfg.seed = args.seed
    engine = Engine(cfg)
    engine.run()


if __name__ == "__main__":
    main()
