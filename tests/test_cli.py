import logging

import jax.numpy as jnp
import pytest

from ephbpn.cli import build_parser, main
from ephbpn.config import get_dtype


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.datetime is None
        assert args.vector is None
        assert args.bias_model == "fixed-offsets"
        assert args.float32 is False
        assert args.verbose is False

    def test_vector(self):
        args = build_parser().parse_args(["20160723", "--vector", "1", "0", "-0.5"])
        assert args.vector == [1.0, 0.0, -0.5]

    def test_unknown_bias_model_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--bias-model", "bogus"])


class TestMain:
    def test_prints_epoch_values(self, capsys):
        assert main(["20160723"]) == 0
        out = capsys.readouterr().out
        assert "TDB  = 2016-07-23T00:00:00Z" in out
        assert "JD   = 2457592.5000000000" in out
        assert "R_bias_prec_nut =" in out
        assert "R_nut =" in out

    def test_vector_output(self, capsys):
        assert main(["20160723", "--vector", "-0.50787065", "0.80728228", "0.34996714"]) == 0
        out = capsys.readouterr().out
        assert "bias_prec_nut" in out
        assert "-5.1140388717968" in out

    def test_fixed_offsets(self, capsys):
        assert main(["20160723", "--bias-model", "fixed-offsets"]) == 0
        out = capsys.readouterr().out
        assert "3.78154673339" in out

    def test_default_bias_is_fixed_offsets(self, capsys):
        assert main(["20160723"]) == 0
        assert "3.78154673339" in capsys.readouterr().out

    def test_iau2006_bias(self, capsys):
        assert main(["20160723", "--bias-model", "iau2006"]) == 0
        out = capsys.readouterr().out
        assert "-7.07836896" in out
        assert "3.78154673339" not in out

    def test_now(self, capsys):
        assert main([]) == 0
        assert "R_bias =" in capsys.readouterr().out

    def test_float32(self, capsys):
        assert main(["20160723", "--float32"]) == 0
        assert get_dtype() == jnp.float32
        assert "JD   = 2457592.5000000000" in capsys.readouterr().out

    @pytest.mark.parametrize("arg", ["2016072", "2016-7-23", "now"])
    def test_bad_format(self, capsys, arg):
        assert main([arg]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[ERROR]" in captured.err
        assert "Format: YYYYMMDD or YYYYMMDDHHMMSS" in captured.err

    def test_invalid_date_time(self, capsys):
        assert main(["20160723250000"]) == 1
        assert "[ERROR] Invalid date-time" in capsys.readouterr().err

    def test_verbose_logs_debug(self, caplog, capsys):
        with caplog.at_level(logging.DEBUG, logger="ephbpn"):
            assert main(["20160723", "-v"]) == 0
        assert any(r.name == "ephbpn.ephemeris" for r in caplog.records)
