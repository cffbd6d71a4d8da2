from tse_id.main import main

if __name__ == "__main__":
    # Running from a checkout without installing; the installed console script
    # is ``tse-id``.
    raise SystemExit(main())
